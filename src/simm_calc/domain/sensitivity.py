"""
Sensitivity record, the central input of the margin calculation.

A sensitivity is classified by risk class, category and sub-risk, and is
located by its bucket, qualifier, labels and tenor. Its threshold
identifier (a bucket, a currency, a currency pair or the placeholder)
selects the concentration threshold applied to it.

Sensitivities are built by:
- Public factories (commodity_delta, interest_rate_delta, ...), one per
  input risk type, carrying regulations and trade identity
- Netted constructors (netted_commodity, netted_fx, ...), used by netting
  to produce one record per risk key without trade identity

Records are immutable: with_amount() and to_curvature() return copies.

Usage:
    from simm_calc.domain.sensitivity import Sensitivity

    sensitivity = Sensitivity.interest_rate_delta(USD, Tenor.Y5, Curve.OIS, amount, regulations, trade)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from simm_calc.contracts.records import (
    EMPTY_REGULATIONS,
    EMPTY_TRADE,
    DataValue,
    RegulationsInfo,
    TradeInfo,
)
from simm_calc.contracts.validation import is_valid_qualifier
from simm_calc.domain.amount import Amount
from simm_calc.domain.buckets import (
    PLACEHOLDER,
    Bucket,
    BucketCommodity,
    BucketCreditNonQualifying,
    BucketCreditQualifying,
    BucketEquity,
    Placeholder,
)
from simm_calc.domain.currency import USD, Currency, CurrencyPair
from simm_calc.domain.enums import (
    Curve,
    Product,
    SensitivityCategory,
    SensitivityRisk,
    SensitivitySubrisk,
)
from simm_calc.domain.tenor import CREDIT_TENORS, Tenor

BucketKey = Union[Bucket, Currency, Placeholder]
ThresholdIdentifier = Union[Bucket, Currency, CurrencyPair, Placeholder]

SECURITIZATION_LABEL = "Sec"

_NETTABLE_CATEGORIES = (SensitivityCategory.CURVATURE, SensitivityCategory.DELTA, SensitivityCategory.VEGA)


def _check_qualifier(qualifier: str, isin_only: bool | None = None) -> None:
    if isin_only is None:
        valid = qualifier is not None and bool(qualifier.strip())
    else:
        valid = is_valid_qualifier(qualifier, isin_only)

    if not valid:
        raise ValueError(f"Invalid qualifier specified: '{qualifier}'.")


def _check_credit_tenor(tenor: Tenor) -> None:
    if tenor not in CREDIT_TENORS:
        accepted = ", ".join(t.value for t in Tenor if t in CREDIT_TENORS)
        raise ValueError(f"Invalid tenor specified: accepted tenors are {accepted}.")


def _check_category(category: SensitivityCategory) -> None:
    if category not in _NETTABLE_CATEGORIES:
        raise ValueError(f"Invalid sensitivity category specified: '{category}'.")


@dataclass(frozen=True)
class Sensitivity(DataValue):
    """
    Immutable risk sensitivity.

    Attributes:
        amount: Sensitivity amount (converted to the calculation currency
            before aggregation)
        currency: Currency the sensitivity refers to; for Rates and Fx delta
            this is the risk currency, otherwise the amount currency
        bucket: Bucket partitioning the risk class
        threshold_identifier: Key of the concentration threshold tables
        product: Product class
        category: Delta, Vega, Curvature or BaseCorrelation
        risk: Risk class
        subrisk: Rates sub-risk, NONE for other risk classes
        qualifier: Economic reference (issuer, index, currency)
        label1: Tenor name where one applies
        label2: Curve label (interest rate) or securitization flag (credit)
        tenor: Tenor where one applies
        identifier: Input risk type ("Risk_IRCurve"), empty once netted
        regulations: Applicable regulations
        trade: Trade identity and end date
    """

    amount: Amount
    currency: Currency
    bucket: BucketKey
    threshold_identifier: ThresholdIdentifier
    product: Product
    category: SensitivityCategory
    risk: SensitivityRisk
    subrisk: SensitivitySubrisk
    qualifier: str
    label1: str = ""
    label2: str = ""
    tenor: Tenor | None = None
    identifier: str = ""
    regulations: RegulationsInfo = EMPTY_REGULATIONS
    trade: TradeInfo = EMPTY_TRADE

    def __str__(self) -> str:
        if self.category == SensitivityCategory.BASE_CORRELATION:
            reference = "BaseCorrelation"
        elif self.subrisk == SensitivitySubrisk.CROSS_CURRENCY_BASIS:
            reference = "CrossCurrencyBasis"
        elif self.subrisk != SensitivitySubrisk.NONE:
            reference = f"{self.subrisk.value} {self.category.value}"
        else:
            reference = f"{self.risk.value} {self.category.value}"

        info = f'Qualifier="{self.qualifier}"'
        if not isinstance(self.bucket, Placeholder):
            info += f' Bucket="{self.bucket.name}"'
        if self.label1:
            info += f' Label1="{self.label1}"'
        if self.label2:
            info += f' Label2="{self.label2}"'

        return f'Sensitivity {reference} {info} Amount="{self.amount}"'

    def to_curvature(self, amount: Amount) -> Sensitivity:
        """Curvature copy of a vega sensitivity, holding the given amount."""
        if self.category != SensitivityCategory.VEGA:
            raise ValueError("Only vega sensitivities can be converted to curvature sensitivities.")

        return replace(self, amount=amount, category=SensitivityCategory.CURVATURE)

    # =========================================================================
    # PUBLIC FACTORIES
    # =========================================================================

    @classmethod
    def base_correlation(
        cls,
        qualifier: str,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        _check_qualifier(qualifier)
        return cls(
            amount=amount,
            currency=amount.currency,
            bucket=PLACEHOLDER,
            threshold_identifier=PLACEHOLDER,
            product=Product.CREDIT,
            category=SensitivityCategory.BASE_CORRELATION,
            risk=SensitivityRisk.CREDIT_QUALIFYING,
            subrisk=SensitivitySubrisk.NONE,
            qualifier=qualifier,
            identifier="Risk_BaseCorr",
            regulations=regulations,
            trade=trade,
        )

    @classmethod
    def commodity_delta(
        cls,
        qualifier: str,
        bucket: BucketCommodity,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        _check_qualifier(qualifier)
        return cls._commodity(SensitivityCategory.DELTA, qualifier, bucket, None, amount, "Risk_Commodity", regulations, trade)

    @classmethod
    def commodity_vega(
        cls,
        qualifier: str,
        bucket: BucketCommodity,
        tenor: Tenor,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        _check_qualifier(qualifier)
        return cls._commodity(SensitivityCategory.VEGA, qualifier, bucket, tenor, amount, "Risk_CommodityVol", regulations, trade)

    @classmethod
    def credit_non_qualifying_delta(
        cls,
        qualifier: str,
        bucket: BucketCreditNonQualifying,
        tenor: Tenor,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        _check_qualifier(qualifier, isin_only=True)
        _check_credit_tenor(tenor)
        return cls._credit_non_qualifying(
            SensitivityCategory.DELTA, qualifier, bucket, tenor, amount, "Risk_CreditNonQ", regulations, trade
        )

    @classmethod
    def credit_non_qualifying_vega(
        cls,
        qualifier: str,
        bucket: BucketCreditNonQualifying,
        tenor: Tenor,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        _check_qualifier(qualifier)
        _check_credit_tenor(tenor)
        return cls._credit_non_qualifying(
            SensitivityCategory.VEGA, qualifier, bucket, tenor, amount, "Risk_CreditVolNonQ", regulations, trade
        )

    @classmethod
    def credit_qualifying_delta(
        cls,
        qualifier: str,
        bucket: BucketCreditQualifying,
        tenor: Tenor,
        securitization: bool,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        _check_qualifier(qualifier, isin_only=True)
        _check_credit_tenor(tenor)
        label2 = SECURITIZATION_LABEL if securitization else ""
        return cls._credit_qualifying(
            SensitivityCategory.DELTA, qualifier, bucket, tenor, label2, amount, "Risk_CreditQ", regulations, trade
        )

    @classmethod
    def credit_qualifying_vega(
        cls,
        qualifier: str,
        bucket: BucketCreditQualifying,
        tenor: Tenor,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        _check_qualifier(qualifier)
        _check_credit_tenor(tenor)
        return cls._credit_qualifying(
            SensitivityCategory.VEGA, qualifier, bucket, tenor, "", amount, "Risk_CreditVol", regulations, trade
        )

    @classmethod
    def cross_currency_basis(
        cls,
        currency: Currency,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        return cls(
            amount=amount,
            currency=currency,
            bucket=currency,
            threshold_identifier=PLACEHOLDER,
            product=Product.RATES_FX,
            category=SensitivityCategory.DELTA,
            risk=SensitivityRisk.RATES,
            subrisk=SensitivitySubrisk.CROSS_CURRENCY_BASIS,
            qualifier=currency.code,
            identifier="Risk_XCcyBasis",
            regulations=regulations,
            trade=trade,
        )

    @classmethod
    def equity_delta(
        cls,
        qualifier: str,
        bucket: BucketEquity,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        _check_qualifier(qualifier, isin_only=False)
        return cls._equity(SensitivityCategory.DELTA, qualifier, bucket, None, amount, "Risk_Equity", regulations, trade)

    @classmethod
    def equity_vega(
        cls,
        qualifier: str,
        bucket: BucketEquity,
        tenor: Tenor,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        _check_qualifier(qualifier, isin_only=False)
        return cls._equity(SensitivityCategory.VEGA, qualifier, bucket, tenor, amount, "Risk_EquityVol", regulations, trade)

    @classmethod
    def fx_delta(
        cls,
        currency: Currency,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        return cls(
            amount=amount,
            currency=currency,
            bucket=PLACEHOLDER,
            threshold_identifier=currency,
            product=Product.RATES_FX,
            category=SensitivityCategory.DELTA,
            risk=SensitivityRisk.FX,
            subrisk=SensitivitySubrisk.NONE,
            qualifier=currency.code,
            identifier="Risk_FX",
            regulations=regulations,
            trade=trade,
        )

    @classmethod
    def fx_vega(
        cls,
        pair: CurrencyPair,
        tenor: Tenor,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        return cls(
            amount=amount,
            currency=amount.currency,
            bucket=PLACEHOLDER,
            threshold_identifier=pair.sort(),
            product=Product.RATES_FX,
            category=SensitivityCategory.VEGA,
            risk=SensitivityRisk.FX,
            subrisk=SensitivitySubrisk.NONE,
            qualifier=pair.to_string(separator=False),
            label1=tenor.value,
            tenor=tenor,
            identifier="Risk_FXVol",
            regulations=regulations,
            trade=trade,
        )

    @classmethod
    def inflation_delta(
        cls,
        currency: Currency,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        return cls._inflation(SensitivityCategory.DELTA, currency, None, amount, "Risk_Inflation", regulations, trade)

    @classmethod
    def inflation_vega(
        cls,
        currency: Currency,
        tenor: Tenor,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        return cls._inflation(SensitivityCategory.VEGA, currency, tenor, amount, "Risk_InflationVol", regulations, trade)

    @classmethod
    def interest_rate_delta(
        cls,
        currency: Currency,
        tenor: Tenor,
        curve: Curve,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        if not isinstance(curve, Curve):
            raise ValueError(f"Invalid curve specified: '{curve}'.")

        if curve.is_usd_only and currency != USD:
            raise ValueError("Invalid curve specified: Municipal and Prime curves can be associated only to USD currency.")

        return cls._interest_rate(
            SensitivityCategory.DELTA, currency, tenor, curve.label, amount, "Risk_IRCurve", regulations, trade
        )

    @classmethod
    def interest_rate_vega(
        cls,
        currency: Currency,
        tenor: Tenor,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> Sensitivity:
        return cls._interest_rate(SensitivityCategory.VEGA, currency, tenor, "", amount, "Risk_IRVol", regulations, trade)

    # =========================================================================
    # NETTED CONSTRUCTORS
    # =========================================================================

    @classmethod
    def netted_base_correlation(cls, qualifier: str, amount: Amount) -> Sensitivity:
        return replace(cls.base_correlation(qualifier, amount), identifier="")

    @classmethod
    def netted_commodity(
        cls, category: SensitivityCategory, qualifier: str, bucket: BucketCommodity, amount: Amount
    ) -> Sensitivity:
        _check_category(category)
        return cls._commodity(category, qualifier, bucket, None, amount)

    @classmethod
    def netted_credit_non_qualifying(
        cls, category: SensitivityCategory, qualifier: str, bucket: BucketCreditNonQualifying, tenor: Tenor, amount: Amount
    ) -> Sensitivity:
        _check_category(category)
        _check_credit_tenor(tenor)
        return cls._credit_non_qualifying(category, qualifier, bucket, tenor, amount)

    @classmethod
    def netted_credit_qualifying(
        cls,
        category: SensitivityCategory,
        qualifier: str,
        bucket: BucketCreditQualifying,
        tenor: Tenor,
        label2: str,
        amount: Amount,
    ) -> Sensitivity:
        _check_category(category)
        _check_credit_tenor(tenor)
        if label2 not in ("", SECURITIZATION_LABEL):
            raise ValueError(f"Invalid label specified: '{label2}'.")
        return cls._credit_qualifying(category, qualifier, bucket, tenor, label2, amount)

    @classmethod
    def netted_cross_currency_basis(cls, currency: Currency, amount: Amount) -> Sensitivity:
        return replace(cls.cross_currency_basis(currency, amount), identifier="")

    @classmethod
    def netted_equity(
        cls, category: SensitivityCategory, qualifier: str, bucket: BucketEquity, amount: Amount
    ) -> Sensitivity:
        _check_category(category)
        return cls._equity(category, qualifier, bucket, None, amount)

    @classmethod
    def netted_fx(
        cls, category: SensitivityCategory, threshold_identifier: Currency | CurrencyPair, amount: Amount
    ) -> Sensitivity:
        """
        Netted Fx sensitivity.

        A currency threshold identifier always yields a delta sensitivity on
        that currency; a currency pair keeps the given category.
        """
        _check_category(category)

        if isinstance(threshold_identifier, Currency):
            return replace(cls.fx_delta(threshold_identifier, amount), identifier="")

        if isinstance(threshold_identifier, CurrencyPair):
            return cls(
                amount=amount,
                currency=amount.currency,
                bucket=PLACEHOLDER,
                threshold_identifier=threshold_identifier,
                product=Product.RATES_FX,
                category=category,
                risk=SensitivityRisk.FX,
                subrisk=SensitivitySubrisk.NONE,
                qualifier=str(threshold_identifier),
            )

        raise ValueError(f"Invalid threshold identifier specified: '{threshold_identifier}'.")

    @classmethod
    def netted_inflation(cls, category: SensitivityCategory, currency: Currency, amount: Amount) -> Sensitivity:
        _check_category(category)
        return cls._inflation(category, currency, None, amount)

    @classmethod
    def netted_interest_rate(
        cls, category: SensitivityCategory, currency: Currency, tenor: Tenor, label2: str, amount: Amount
    ) -> Sensitivity:
        _check_category(category)
        if label2:
            Curve.parse(label2)
        return cls._interest_rate(category, currency, tenor, label2, amount)

    # =========================================================================
    # SHARED BUILDERS
    # =========================================================================

    @classmethod
    def _commodity(cls, category, qualifier, bucket, tenor, amount, identifier="", regulations=EMPTY_REGULATIONS, trade=EMPTY_TRADE):
        return cls(
            amount=amount,
            currency=amount.currency,
            bucket=bucket,
            threshold_identifier=bucket,
            product=Product.COMMODITY,
            category=category,
            risk=SensitivityRisk.COMMODITY,
            subrisk=SensitivitySubrisk.NONE,
            qualifier=qualifier,
            label1=tenor.value if tenor else "",
            tenor=tenor,
            identifier=identifier,
            regulations=regulations,
            trade=trade,
        )

    @classmethod
    def _credit_non_qualifying(cls, category, qualifier, bucket, tenor, amount, identifier="", regulations=EMPTY_REGULATIONS, trade=EMPTY_TRADE):
        return cls(
            amount=amount,
            currency=amount.currency,
            bucket=bucket,
            threshold_identifier=bucket,
            product=Product.CREDIT,
            category=category,
            risk=SensitivityRisk.CREDIT_NON_QUALIFYING,
            subrisk=SensitivitySubrisk.NONE,
            qualifier=qualifier,
            label1=tenor.value,
            tenor=tenor,
            identifier=identifier,
            regulations=regulations,
            trade=trade,
        )

    @classmethod
    def _credit_qualifying(cls, category, qualifier, bucket, tenor, label2, amount, identifier="", regulations=EMPTY_REGULATIONS, trade=EMPTY_TRADE):
        return cls(
            amount=amount,
            currency=amount.currency,
            bucket=bucket,
            threshold_identifier=bucket,
            product=Product.CREDIT,
            category=category,
            risk=SensitivityRisk.CREDIT_QUALIFYING,
            subrisk=SensitivitySubrisk.NONE,
            qualifier=qualifier,
            label1=tenor.value,
            label2=label2,
            tenor=tenor,
            identifier=identifier,
            regulations=regulations,
            trade=trade,
        )

    @classmethod
    def _equity(cls, category, qualifier, bucket, tenor, amount, identifier="", regulations=EMPTY_REGULATIONS, trade=EMPTY_TRADE):
        return cls(
            amount=amount,
            currency=amount.currency,
            bucket=bucket,
            threshold_identifier=bucket,
            product=Product.EQUITY,
            category=category,
            risk=SensitivityRisk.EQUITY,
            subrisk=SensitivitySubrisk.NONE,
            qualifier=qualifier,
            label1=tenor.value if tenor else "",
            tenor=tenor,
            identifier=identifier,
            regulations=regulations,
            trade=trade,
        )

    @classmethod
    def _inflation(cls, category, currency, tenor, amount, identifier="", regulations=EMPTY_REGULATIONS, trade=EMPTY_TRADE):
        return cls(
            amount=amount,
            currency=currency,
            bucket=currency,
            threshold_identifier=currency,
            product=Product.RATES_FX,
            category=category,
            risk=SensitivityRisk.RATES,
            subrisk=SensitivitySubrisk.INFLATION,
            qualifier=currency.code,
            label1=tenor.value if tenor else "",
            tenor=tenor,
            identifier=identifier,
            regulations=regulations,
            trade=trade,
        )

    @classmethod
    def _interest_rate(cls, category, currency, tenor, label2, amount, identifier="", regulations=EMPTY_REGULATIONS, trade=EMPTY_TRADE):
        return cls(
            amount=amount,
            currency=currency,
            bucket=currency,
            threshold_identifier=currency,
            product=Product.RATES_FX,
            category=category,
            risk=SensitivityRisk.RATES,
            subrisk=SensitivitySubrisk.INTEREST_RATE,
            qualifier=currency.code,
            label1=tenor.value,
            label2=label2,
            tenor=tenor,
            identifier=identifier,
            regulations=regulations,
            trade=trade,
        )
