"""Locale-aware amount formatting for bill listings."""

from typing import Optional

from babel import Locale, UnknownLocaleError
from babel.numbers import format_currency, format_decimal

from cospend.common.utils import LOG
from cospend.constants.currencies import code_to_symbol, symbol_to_code

DEFAULT_LOCALE = "en_US"
PLAIN_AMOUNT_PATTERN = "#,##0.00"


def resolve_locale(locale_name: Optional[str] = None, language: Optional[str] = None) -> Locale:
    """First parseable of the user's locale and language, else en_US.

    Nextcloud reports locales as ``de_DE`` and languages as ``de``; BCP 47
    style tags (``de-DE``) are accepted as well.
    """
    for candidate in (locale_name, language):
        if not candidate:
            continue
        try:
            return Locale.parse(candidate.strip().replace("-", "_"))
        except (UnknownLocaleError, ValueError, TypeError) as e:
            LOG.debug(f"Ignoring locale {candidate!r}: {e}")
    return Locale.parse(DEFAULT_LOCALE)


class AmountFormatter:
    """Format amounts in a project's currency using the user's locale.

    The project currency name may be an ISO code ("EUR") or a bare symbol
    ("₪"). Either is mapped to a known currency and formatted with the
    locale's currency pattern (``€1,234.50`` in en_US, ``1.234,50 €`` in
    de_DE). Unknown names fall back to a locale-formatted two-decimal number.
    """

    def __init__(self, currency_name: str = "", locale: Optional[Locale] = None):
        self.locale = locale or resolve_locale()
        self.currency_code = self._resolve_code(currency_name)

    @staticmethod
    def _resolve_code(currency_name: str) -> Optional[str]:
        name = (currency_name or "").strip()
        if not name:
            return None
        if code_to_symbol(name):
            return name.upper()
        return symbol_to_code(name)

    def format(self, amount: float) -> str:
        if not self.currency_code:
            return format_decimal(amount, format=PLAIN_AMOUNT_PATTERN, locale=self.locale)
        return format_currency(amount, self.currency_code, locale=self.locale)
