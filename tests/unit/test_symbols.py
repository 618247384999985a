"""Tests for ticker normalization and display currency."""

import pytest

from optcalc.sdk.symbols import normalize_symbol, currency_symbol


class TestNormalizeSymbol:
    """Tests for normalize_symbol()."""

    @pytest.mark.parametrize("raw,expected", [
        ("9863.hk", "hk09863"),
        ("2800.hk", "hk02800"),
        ("00700.hk", "hk00700"),
        ("9863.HK", "hk09863"),
    ])
    def test_hong_kong_suffix_is_padded_and_prefixed(self, raw, expected):
        assert normalize_symbol(raw) == expected

    def test_shanghai_suffix_becomes_market_prefix(self):
        assert normalize_symbol("600000.sh") == "sh600000"
        assert normalize_symbol("600000.SH") == "sh600000"

    def test_shenzhen_suffix_becomes_market_prefix(self):
        assert normalize_symbol("000001.sz") == "sz000001"

    def test_prefixed_mainland_code_passes_through_lower_cased(self):
        """A code already carrying its market prefix is kept as is."""
        assert normalize_symbol("SH600000.sh") == "sh600000"

    def test_bare_code_defaults_to_hong_kong(self):
        assert normalize_symbol("700") == "hk00700"
        assert normalize_symbol("0700") == "hk00700"

    def test_long_code_is_not_truncated(self):
        assert normalize_symbol("123456") == "hk123456"

    def test_whitespace_is_stripped(self):
        assert normalize_symbol("  9863.hk ") == "hk09863"

    def test_malformed_code_passes_through(self):
        """Non-numeric codes are not rejected; the provider validates them."""
        assert normalize_symbol("abc") == "hk00abc"


class TestCurrencySymbol:
    """Tests for currency_symbol()."""

    def test_hk_suffix_shows_hong_kong_dollar(self):
        assert currency_symbol("9863.hk") == "HK$"
        assert currency_symbol("9863.HK") == "HK$"

    def test_other_symbols_show_yuan(self):
        assert currency_symbol("600000.sh") == "¥"
        assert currency_symbol("000001.sz") == "¥"
        # Bare codes default to Hong Kong quotes but keep the yuan sign
        assert currency_symbol("0700") == "¥"
