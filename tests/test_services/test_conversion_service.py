import math

import pytest

from application.services.conversion_service import convert
from config.currencies import SUPPORTED_CODES
from domain.exceptions.currency import InvalidAmountError, MissingRateError, UnknownCurrencyError
from domain.models.currency import RateTable


class TestConversionFormulas:

    def test_base_to_target_multiplies(self, rate_table):
        assert convert(1000, 'ARS', 'USD', rate_table) == pytest.approx(1.1)

    def test_source_to_base_divides(self, rate_table):
        assert convert(1.1, 'USD', 'ARS', rate_table) == pytest.approx(1000)

    def test_cross_pair_pivots_through_base(self, rate_table):
        result = convert(100, 'EUR', 'USD', rate_table)

        assert result == pytest.approx(100 / 0.00095 * 0.0011)
        assert round(result, 2) == 115.79

    @pytest.mark.parametrize('code', sorted(SUPPORTED_CODES))
    @pytest.mark.parametrize('amount', [0, 0.01, 1, 1234.5678, 1e12])
    def test_same_currency_is_identity(self, code, amount):
        empty_table = RateTable(base='ARS')

        assert convert(amount, code, code, empty_table) == amount

    @pytest.mark.parametrize('source', ['USD', 'EUR', 'GBP', 'JPY'])
    @pytest.mark.parametrize('target', ['USD', 'EUR', 'GBP', 'JPY'])
    def test_pivot_consistency(self, rate_table, source, target):
        via_base = convert(convert(250.0, source, 'ARS', rate_table), 'ARS', target, rate_table)

        assert convert(250.0, source, target, rate_table) == pytest.approx(via_base)

    def test_zero_amount_is_accepted(self, rate_table):
        assert convert(0, 'ARS', 'USD', rate_table) == 0.0

    def test_result_is_not_rounded(self, rate_table):
        assert convert(1, 'ARS', 'USD', rate_table) == 0.0011


class TestConversionErrors:

    @pytest.mark.parametrize('amount', [-1, -0.01, math.inf, -math.inf, math.nan, '100', None, True])
    def test_invalid_amount(self, rate_table, amount):
        with pytest.raises(InvalidAmountError):
            convert(amount, 'ARS', 'USD', rate_table)

    def test_invalid_amount_checked_before_identity(self, rate_table):
        with pytest.raises(InvalidAmountError):
            convert(-5, 'USD', 'USD', rate_table)

    @pytest.mark.parametrize('source,target', [('XXX', 'USD'), ('USD', 'BTC'), ('usd', 'EUR')])
    def test_unknown_currency(self, rate_table, source, target):
        with pytest.raises(UnknownCurrencyError):
            convert(10, source, target, rate_table)

    def test_unknown_currency_even_for_identity(self, rate_table):
        with pytest.raises(UnknownCurrencyError):
            convert(10, 'BTC', 'BTC', rate_table)

    def test_custom_supported_set(self, rate_table):
        with pytest.raises(UnknownCurrencyError):
            convert(10, 'ARS', 'JPY', rate_table, supported={'ARS', 'USD'})

    @pytest.mark.parametrize('source,target', [('ARS', 'GBP'), ('GBP', 'ARS'), ('GBP', 'USD'), ('USD', 'GBP')])
    def test_missing_rate(self, source, target):
        table = RateTable(base='ARS', rates={'USD': 0.0011})

        with pytest.raises(MissingRateError):
            convert(10, source, target, table)

    def test_base_never_needs_a_table_entry(self):
        table = RateTable(base='ARS', rates={'USD': 0.0011})

        assert convert(10, 'USD', 'ARS', table) == pytest.approx(10 / 0.0011)
