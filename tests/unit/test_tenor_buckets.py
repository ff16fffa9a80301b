"""
Unit tests for tenors, buckets and curves.
"""

from decimal import Decimal

import pytest

from simm_calc.domain.buckets import (
    PLACEHOLDER,
    BucketCommodity,
    BucketCreditNonQualifying,
    BucketCreditQualifying,
    BucketEquity,
)
from simm_calc.domain.enums import Curve
from simm_calc.domain.tenor import CREDIT_TENORS, Tenor


class TestTenor:
    """Tests for Tenor parsing and day counts."""

    @pytest.mark.parametrize("text,expected", [("2w", Tenor.W2), ("3M", Tenor.M3), ("10y", Tenor.Y10)])
    def test_parse(self, text, expected):
        assert Tenor.parse(text) is expected

    @pytest.mark.parametrize("text", ["4y", "0m", "1d", "", None])
    def test_parse_rejects_invalid(self, text):
        with pytest.raises(ValueError):
            Tenor.parse(text)

    def test_days(self):
        assert Tenor.W2.days == Decimal(14)
        assert Tenor.M6.days == Decimal(365) / Decimal(12) * 6
        assert Tenor.Y5.days == Decimal(1825)

    def test_credit_tenors(self):
        assert CREDIT_TENORS == {Tenor.Y1, Tenor.Y2, Tenor.Y3, Tenor.Y5, Tenor.Y10}
        assert Tenor.Y5.is_credit_tenor
        assert not Tenor.M6.is_credit_tenor

    def test_description(self):
        assert Tenor.Y1.description == "1-Year Tenor"
        assert Tenor.Y30.description == "30-Years Tenor"


class TestBuckets:
    """Tests for numbered, residual and placeholder buckets."""

    def test_parse_number_and_residual(self):
        assert BucketEquity.parse("11") == BucketEquity.of(11)
        assert BucketEquity.parse("residual").is_residual

    def test_commodity_has_no_residual(self):
        with pytest.raises(ValueError):
            BucketCommodity.residual()
        with pytest.raises(ValueError):
            BucketCommodity.parse("Residual")

    @pytest.mark.parametrize("bucket_type,count", [
        (BucketCommodity, 17),
        (BucketCreditQualifying, 13),
        (BucketCreditNonQualifying, 3),
        (BucketEquity, 13),
    ])
    def test_values_place_residual_last(self, bucket_type, count):
        values = bucket_type.values()

        assert len(values) == count
        if bucket_type.HAS_RESIDUAL:
            assert values[-1].is_residual

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            BucketEquity.of(13)

    def test_buckets_of_different_classes_differ(self):
        assert BucketEquity.of(1) != BucketCreditQualifying.of(1)

    def test_names_and_descriptions(self):
        assert BucketCommodity.of(2).name == "2"
        assert BucketCommodity.of(2).description == "Crude Oil"
        assert BucketEquity.residual().description == "Residual"

    def test_placeholder(self):
        assert PLACEHOLDER.name == "Unused"
        assert not PLACEHOLDER.is_residual


class TestCurve:
    """Tests for curve labels."""

    @pytest.mark.parametrize("text,expected", [
        ("Libor3m", Curve.LIBOR_3M),
        ("LIBOR3M", Curve.LIBOR_3M),
        ("OIS", Curve.OIS),
    ])
    def test_parse(self, text, expected):
        assert Curve.parse(text) is expected

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError):
            Curve.parse("Libor2m")

    def test_usd_only_curves(self):
        assert Curve.MUNICIPAL.is_usd_only
        assert Curve.PRIME.is_usd_only
        assert not Curve.OIS.is_usd_only
