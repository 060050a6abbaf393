from cospend.common.amount_format import AmountFormatter, resolve_locale
from cospend.constants.currencies import (
    CURRENCY_CODE_TO_SYMBOL,
    _symbol_index,
    code_to_symbol,
    symbol_to_code,
)


class TestCodeToSymbol:
    def test_known_codes(self):
        assert code_to_symbol("usd") == "$"
        assert code_to_symbol("eur") == "€"
        assert code_to_symbol("ils") == "₪"

    def test_case_insensitive(self):
        assert code_to_symbol("EUR") == code_to_symbol("eur")
        assert code_to_symbol("Gbp") == "£"

    def test_unknown_code(self):
        assert code_to_symbol("xyz") is None
        assert code_to_symbol("") is None


class TestSymbolToCode:
    def test_preferred_codes_win_shared_symbols(self):
        assert symbol_to_code("$") == "USD"
        assert symbol_to_code("£") == "GBP"
        assert symbol_to_code("€") == "EUR"
        assert symbol_to_code("¥") == "CNY"

    def test_unique_symbol(self):
        assert symbol_to_code("₪") == "ILS"

    def test_unknown_symbol(self):
        assert symbol_to_code("¤¤") is None

    def test_every_symbol_maps_back_to_a_code_with_that_symbol(self):
        for symbol in set(CURRENCY_CODE_TO_SYMBOL.values()):
            code = symbol_to_code(symbol)
            assert code is not None
            assert code_to_symbol(code) == symbol

    def test_index_built_once(self):
        _symbol_index.cache_clear()

        for symbol in ("$", "€", "₪", "¤¤", "$"):
            symbol_to_code(symbol)

        info = _symbol_index.cache_info()
        assert info.misses == 1
        assert info.hits == 4


class TestResolveLocale:
    def test_locale_preferred_over_language(self):
        assert str(resolve_locale("de_DE", "fr")) == "de_DE"

    def test_language_when_locale_missing(self):
        assert str(resolve_locale("", "fr")) == "fr"

    def test_dash_separated_tag(self):
        assert str(resolve_locale("he-IL")) == "he_IL"

    def test_unknown_falls_back_to_en_us(self):
        assert str(resolve_locale("xx_XX", "not a locale")) == "en_US"
        assert str(resolve_locale()) == "en_US"


class TestAmountFormatter:
    def test_iso_code_currency(self):
        assert AmountFormatter("EUR").format(1234.5) == "€1,234.50"

    def test_symbol_currency(self):
        assert AmountFormatter("$").format(25) == "$25.00"

    def test_negative_amount(self):
        assert AmountFormatter("usd").format(-3.5) == "-$3.50"

    def test_unknown_currency_is_plain(self):
        assert AmountFormatter("Moon Bucks").format(1234.5) == "1,234.50"
        assert AmountFormatter("").format(7) == "7.00"

    def test_german_locale(self):
        formatter = AmountFormatter("EUR", resolve_locale("de_DE"))
        assert formatter.format(1234.5) == "1.234,50\xa0€"

    def test_german_locale_plain_amount(self):
        formatter = AmountFormatter("", resolve_locale("de_DE"))
        assert formatter.format(1234.5) == "1.234,50"
