"""
Domain enums for the SIMM calculator.

Defines the closed value sets used throughout the margin calculation:
- Product / SensitivityRisk / SensitivityCategory / SensitivitySubrisk:
  classification of every sensitivity
- CurrencyCategory / CurrencyLiquidity / CurrencyVolatility: currency
  attributes selecting parameter-table rows
- Curve: interest-rate curve labels
- Regulation / RegulationRole: regulatory routing and sign conventions
- ErrorSeverity / ErrorCategory: error classification

Enum values are the display names used as margin tree identifiers.
Declaration order is significant: products, risks and categories are
ordered by it in the margin tree, and regulations break worst-of ties by it.
"""

from __future__ import annotations

from enum import Enum


def enum_order(member: Enum) -> int:
    """Position of an enum member in its declaration order."""
    return list(type(member)).index(member)


class Product(Enum):
    """Product class of a sensitivity."""

    COMMODITY = "Commodity"
    CREDIT = "Credit"
    EQUITY = "Equity"
    RATES_FX = "RatesFx"


class SensitivityCategory(Enum):
    """Sensitivity category, each aggregated by its own combination strategy."""

    BASE_CORRELATION = "BaseCorrelation"
    CURVATURE = "Curvature"
    DELTA = "Delta"
    VEGA = "Vega"


class SensitivityRisk(Enum):
    """
    Risk class of a sensitivity.

    The six risk classes of the inter-risk correlation table. Each has its
    own parameter provider (risk weights, correlations, thresholds).
    """

    COMMODITY = "Commodity"
    CREDIT_QUALIFYING = "CreditQualifying"
    CREDIT_NON_QUALIFYING = "CreditNonQualifying"
    EQUITY = "Equity"
    FX = "Fx"
    RATES = "Rates"


class SensitivitySubrisk(Enum):
    """Sub-risk of a Rates sensitivity (NONE for every other risk class)."""

    NONE = "None"
    CROSS_CURRENCY_BASIS = "CrossCurrencyBasis"
    INFLATION = "Inflation"
    INTEREST_RATE = "InterestRate"


class CurrencyCategory(Enum):
    """Currency category used by the Fx threshold tables."""

    FREQUENTLY_TRADED = "FrequentlyTraded"
    SIGNIFICANTLY_MATERIAL = "SignificantlyMaterial"
    OTHER = "Other"


class CurrencyLiquidity(Enum):
    """Currency liquidity used by the Rates threshold tables."""

    UNDEFINED = "Undefined"
    MEDIUM = "Medium"
    HIGH = "High"


class CurrencyVolatility(Enum):
    """Currency volatility tier used by the Rates delta risk weights."""

    REGULAR = "Regular"
    LOW = "Low"
    HIGH = "High"


class Curve(Enum):
    """
    Interest-rate curve label.

    The label stored on a sensitivity keeps only the first letter upper
    case ("Libor3m", "Ois"). Municipal and Prime curves only exist for USD.
    """

    LIBOR_1M = "Libor1m"
    LIBOR_3M = "Libor3m"
    LIBOR_6M = "Libor6m"
    LIBOR_12M = "Libor12m"
    MUNICIPAL = "Municipal"
    OIS = "Ois"
    PRIME = "Prime"

    @property
    def label(self) -> str:
        """Label stored as label2 of interest-rate delta sensitivities."""
        return self.value

    @property
    def is_usd_only(self) -> bool:
        return self in (Curve.MUNICIPAL, Curve.PRIME)

    @classmethod
    def parse(cls, value: str) -> Curve:
        """Parse a curve label case-insensitively ("Libor3m", "LIBOR3M", "OIS")."""
        if value:
            normalized = value.strip().lower()
            for curve in cls:
                if curve.value.lower() == normalized:
                    return curve
        raise ValueError(f"Invalid curve specified: '{value}'.")


class Regulation(Enum):
    """Regulators a risk record may be collected or posted under."""

    APRA = "APRA"
    CFTC = "CFTC"
    ESA = "ESA"
    FINMA = "FINMA"
    KFSC = "KFSC"
    HKMA = "HKMA"
    JFSA = "JFSA"
    MAS = "MAS"
    OSFI = "OSFI"
    RBI = "RBI"
    SEC = "SEC"
    SANT = "SANT"
    USPR = "USPR"


class RegulationRole(Enum):
    """
    Side of a bilateral margin exchange.

    PLEDGOR posts margin: sensitivities flip sign before aggregation and the
    final total is negated. SECURED collects margin: present values flip sign.
    """

    PLEDGOR = "Pledgor"
    SECURED = "Secured"


class ErrorSeverity(Enum):
    """
    Severity levels for calculation errors.

    Every error raised by the engine aborts the calculation; severity
    classifies the error for reporting.
    """

    # Error that invalidates the calculation call
    ERROR = "error"

    # Error caused by malformed or inconsistent input that must be fixed upstream
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """
    Categories for calculation errors.

    Enables filtering and analysis of error types.
    """

    # Currency mismatch, undefined enum value, missing rate or parameter
    STRUCTURAL = "structural"

    # Add-on parameters or trades that do not match their base records
    DATA_CONSISTENCY = "data_consistency"

    # Mixed regulations where a single-regulation result was requested
    POLICY = "policy"

    # Schema validation failures on frame inputs
    SCHEMA_VALIDATION = "schema_validation"
