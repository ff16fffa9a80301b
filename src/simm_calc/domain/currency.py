"""
Currencies and currency pairs.

A Currency is a closed ISO 4217 code carrying the attributes that select
parameter-table rows:
- category: Fx delta/vega thresholds
- liquidity and volatility: Rates risk weights and thresholds

Currency doubles as a bucket (Rates sensitivities are bucketed by currency)
and as a threshold identifier (Rates, Inflation and Fx delta thresholds).
CurrencyPair is the threshold identifier of Fx vega sensitivities.

Usage:
    from simm_calc.domain.currency import Currency, CurrencyPair

    usd = Currency.parse("USD")
    pair = CurrencyPair.parse("EURUSD")
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from simm_calc.domain.enums import CurrencyCategory, CurrencyLiquidity, CurrencyVolatility


# =============================================================================
# ISO CODES
# =============================================================================

CURRENCY_DESCRIPTIONS: dict[str, str] = {
    "AED": "UAE Dirham",
    "AFN": "Afghan Afghani",
    "ALL": "Albanian Lek",
    "AMD": "Armenian Dram",
    "ANG": "Netherlands Antillean Guilder",
    "AOA": "Angolan Kwanza",
    "ARS": "Argentine Peso",
    "AUD": "Australian Dollar",
    "AWG": "Aruban Florin",
    "AZN": "Azerbaijan Manat",
    "BAM": "Convertible Mark",
    "BBD": "Barbados Dollar",
    "BDT": "Bangladeshi Taka",
    "BGN": "Bulgarian Lev",
    "BHD": "Bahraini Dinar",
    "BIF": "Burundi Franc",
    "BMD": "Bermudian Dollar",
    "BND": "Brunei Dollar",
    "BOB": "Bolivian Boliviano",
    "BRL": "Brazilian Real",
    "BSD": "Bahamian Dollar",
    "BTN": "Bhutanese Ngultrum",
    "BWP": "Botswana Pula",
    "BYN": "Belarusian Ruble",
    "BZD": "Belize Dollar",
    "CAD": "Canadian Dollar",
    "CDF": "Congolese Franc",
    "CHF": "Swiss Franc",
    "CLP": "Chilean Peso",
    "CNY": "Yuan Renminbi",
    "COP": "Colombian Peso",
    "CRC": "Costa Rican Colon",
    "CUP": "Cuban Peso",
    "CVE": "Cabo Verde Escudo",
    "CZK": "Czech Koruna",
    "DJF": "Djibouti Franc",
    "DKK": "Danish Krone",
    "DOP": "Dominican Peso",
    "DZD": "Algerian Dinar",
    "EGP": "Egyptian Pound",
    "ERN": "Eritrean Nakfa",
    "ETB": "Ethiopian Birr",
    "EUR": "Euro",
    "FJD": "Fiji Dollar",
    "FKP": "Falkland Islands Pound",
    "GBP": "Pound Sterling",
    "GEL": "Georgian Lari",
    "GHS": "Ghana Cedi",
    "GIP": "Gibraltar Pound",
    "GMD": "Gambian Dalasi",
    "GNF": "Guinean Franc",
    "GTQ": "Guatemalan Quetzal",
    "GYD": "Guyana Dollar",
    "HKD": "Hong Kong Dollar",
    "HNL": "Honduran Lempira",
    "HRK": "Croatian Kuna",
    "HTG": "Haitian Gourde",
    "HUF": "Hungarian Forint",
    "IDR": "Indonesian Rupiah",
    "ILS": "Israeli Sheqel",
    "INR": "Indian Rupee",
    "IQD": "Iraqi Dinar",
    "IRR": "Iranian Rial",
    "ISK": "Iceland Krona",
    "JMD": "Jamaican Dollar",
    "JOD": "Jordanian Dinar",
    "JPY": "Japanese Yen",
    "KES": "Kenyan Shilling",
    "KGS": "Kyrgyzstani Som",
    "KHR": "Omani Riel",
    "KMF": "Comorian Franc ",
    "KPW": "North Korean Won",
    "KRW": "South Korean Won",
    "KWD": "Kuwaiti Dinar",
    "KYD": "Cayman Islands Dollar",
    "KZT": "Kazakhstani Tenge",
    "LAK": "Lao Kip",
    "LBP": "Lebanese Pound",
    "LKR": "Sri Lanka Rupee",
    "LRD": "Liberian Dollar",
    "LSL": "Basotho Loti",
    "LYD": "Libyan Dinar",
    "MAD": "Moroccan Dirham",
    "MDL": "Moldovan Leu",
    "MGA": "Malagasy Ariary",
    "MKD": "Macedonian Denar",
    "MMK": "Burmese Kyat",
    "MNT": "Mongolian Tugrik",
    "MOP": "Macanese Pataca",
    "MRU": "Mauritanian Ouguiya",
    "MUR": "Mauritius Rupee",
    "MVR": "Maldivian Rufiyaa",
    "MWK": "Malawi Kwacha",
    "MXN": "Mexican Peso",
    "MYR": "Malaysian Ringgit",
    "MZN": "Mozambique Metical",
    "NAD": "Namibia Dollar",
    "NGN": "Nigerian Naira",
    "NIO": "Nicaraguan Cordoba",
    "NOK": "Norwegian Krone",
    "NPR": "Nepalese Rupee",
    "NZD": "New Zealand Dollar",
    "OMR": "Omani Rial",
    "PAB": "Panamanian Balboa",
    "PEN": "Peruvian Sol",
    "PGK": "Papua New Guinean Kina",
    "PHP": "Philippine Peso",
    "PKR": "Pakistan Rupee",
    "PLN": "Polish Zloty",
    "PYG": "Paraguayan Guarani",
    "QAR": "Qatari Rial",
    "RON": "Romanian Leu",
    "RSD": "Serbian Dinar",
    "RUB": "Russian Ruble",
    "RWF": "Rwanda Franc",
    "SAR": "Saudi Riyal",
    "SBD": "Solomon Islands Dollar",
    "SCR": "Seychelles Rupee",
    "SDG": "Sudanese Pound",
    "SEK": "Swedish Krona",
    "SGD": "Singapore Dollar",
    "SHP": "Saint Helena Pound",
    "SLL": "Sierra Leonean Leone",
    "SOS": "Somali Shilling",
    "SRD": "Surinam Dollar",
    "STN": "Sao Tomean Dobra",
    "SVC": "El Salvador Colon",
    "SYP": "Syrian Pound",
    "SZL": "Swazi Lilangeni",
    "THB": "Thai Baht",
    "TJS": "Tajikistani Samani",
    "TMT": "Turkmenistan Manat",
    "TND": "Tunisian Dinar",
    "TOP": "Tongan Pa'anga",
    "TRY": "Turkish Lira",
    "TTD": "Trinidadian Dollar",
    "TVD": "Tuvaluan Dollar",
    "TWD": "Taiwan Dollar",
    "TZS": "Tanzanian Shilling",
    "UAH": "Ukrainian Hryvnia",
    "UGX": "Uganda Shilling",
    "USD": "United States Dollar",
    "UYU": "Peso Uruguayo",
    "UZS": "Uzbekistan Sum",
    "VES": "Venezuelan Soberano",
    "VND": "Vietnamese Dong",
    "VUV": "Vanuatu Vatu",
    "WST": "Samoan Tala",
    "YER": "Yemeni Rial",
    "ZAR": "South African Rand",
    "ZMW": "Zambian Kwacha",
    "ZWL": "Zimbabwean Dollar",
}

CATEGORY_FREQUENTLY_TRADED: frozenset[str] = frozenset({
    "BRL", "CNY", "HKD", "INR", "KRW",
    "MXN", "NOK", "NZD", "RUB", "SEK",
    "SGD", "TRY", "ZAR",
})

CATEGORY_SIGNIFICANTLY_MATERIAL: frozenset[str] = frozenset({
    "AUD", "CAD", "CHF", "EUR", "GBP",
    "JPY", "USD",
})

LIQUIDITY_MEDIUM: frozenset[str] = frozenset({
    "AUD", "CAD", "CHF", "DKK", "HKD",
    "KRW", "NOK", "NZD", "SEK", "SGD",
    "TWD",
})

LIQUIDITY_HIGH: frozenset[str] = frozenset({"EUR", "GBP", "USD"})

VOLATILITY_LOW: frozenset[str] = frozenset({"JPY"})

VOLATILITY_REGULAR: frozenset[str] = LIQUIDITY_MEDIUM | LIQUIDITY_HIGH

_CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


# =============================================================================
# CURRENCY
# =============================================================================


@dataclass(frozen=True)
class Currency:
    """
    ISO currency, identified by its three-letter code.

    Only codes listed in CURRENCY_DESCRIPTIONS can be constructed.
    """

    code: str
    description: str = field(compare=False)

    def __post_init__(self) -> None:
        if self.code not in CURRENCY_DESCRIPTIONS:
            raise ValueError(f"Invalid currency specified: '{self.code}'.")

    def __str__(self) -> str:
        return self.code

    @property
    def name(self) -> str:
        return self.code

    @property
    def is_residual(self) -> bool:
        return False

    @property
    def category(self) -> CurrencyCategory:
        if self.code in CATEGORY_FREQUENTLY_TRADED:
            return CurrencyCategory.FREQUENTLY_TRADED
        if self.code in CATEGORY_SIGNIFICANTLY_MATERIAL:
            return CurrencyCategory.SIGNIFICANTLY_MATERIAL
        return CurrencyCategory.OTHER

    @property
    def liquidity(self) -> CurrencyLiquidity:
        if self.code in LIQUIDITY_HIGH:
            return CurrencyLiquidity.HIGH
        if self.code in LIQUIDITY_MEDIUM:
            return CurrencyLiquidity.MEDIUM
        return CurrencyLiquidity.UNDEFINED

    @property
    def volatility(self) -> CurrencyVolatility:
        if self.code in VOLATILITY_LOW:
            return CurrencyVolatility.LOW
        if self.code in VOLATILITY_REGULAR:
            return CurrencyVolatility.REGULAR
        return CurrencyVolatility.HIGH

    @classmethod
    def parse(cls, text: str, ignore_case: bool = False) -> Currency:
        """Parse a three-letter currency code."""
        if text is None:
            raise ValueError("Invalid currency specified: None.")

        code = text.strip()
        if ignore_case:
            code = code.upper()

        if not _CURRENCY_PATTERN.match(code) or code not in _CURRENCIES:
            raise ValueError(f"Invalid currency specified: '{text}'.")

        return _CURRENCIES[code]

    @classmethod
    def values(cls) -> list[Currency]:
        """All currencies ordered by code."""
        return list(_CURRENCIES.values())


_CURRENCIES: dict[str, Currency] = {
    code: Currency(code, description)
    for code, description in sorted(CURRENCY_DESCRIPTIONS.items())
}

AUD = _CURRENCIES["AUD"]
CAD = _CURRENCIES["CAD"]
CHF = _CURRENCIES["CHF"]
EUR = _CURRENCIES["EUR"]
GBP = _CURRENCIES["GBP"]
JPY = _CURRENCIES["JPY"]
USD = _CURRENCIES["USD"]


# =============================================================================
# CURRENCY PAIR
# =============================================================================


@dataclass(frozen=True)
class CurrencyPair:
    """Ordered pair of two distinct currencies (base/counter)."""

    base: Currency
    counter: Currency

    def __post_init__(self) -> None:
        if self.base == self.counter:
            raise ValueError("A currency pair must be defined by two different currencies.")

    def __str__(self) -> str:
        return self.to_string(separator=True)

    @property
    def name(self) -> str:
        return str(self)

    @property
    def description(self) -> str:
        return str(self)

    @property
    def is_residual(self) -> bool:
        return False

    def to_string(self, separator: bool = True) -> str:
        if separator:
            return f"{self.base.code}/{self.counter.code}"
        return f"{self.base.code}{self.counter.code}"

    def invert(self) -> CurrencyPair:
        return CurrencyPair(self.counter, self.base)

    def sort(self) -> CurrencyPair:
        """Pair with its currencies in code order."""
        first, second = sorted((self.base, self.counter), key=lambda c: c.code)
        return CurrencyPair(first, second)

    @classmethod
    def of(cls, base: Currency, counter: Currency) -> CurrencyPair:
        return cls(base, counter)

    @classmethod
    def parse(cls, text: str, ignore_case: bool = False) -> CurrencyPair:
        """Parse "EURUSD" or "EUR/USD" (any single separator character)."""
        if not text or not text.strip():
            raise ValueError("Invalid currency pair specified.")

        text = text.strip()
        if len(text) == 6:
            offset = 3
        elif len(text) == 7:
            offset = 4
        else:
            raise ValueError(f"Invalid currency pair specified: '{text}'.")

        try:
            base = Currency.parse(text[0:3], ignore_case)
        except ValueError:
            raise ValueError(f"The first currency of the pair ({text[0:3]}) is invalid.") from None

        try:
            counter = Currency.parse(text[offset:offset + 3], ignore_case)
        except ValueError:
            raise ValueError(f"The second currency of the pair ({text[offset:offset + 3]}) is invalid.") from None

        return cls(base, counter)
