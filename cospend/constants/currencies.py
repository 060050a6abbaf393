"""Currency code and symbol lookup tables.

Cospend stores a project's currency as free text: sometimes an ISO code,
sometimes a bare symbol, sometimes a description embedding a symbol
(e.g. "US Dollar ($)"). These tables translate between ISO codes and the
printable symbols used in those names.
"""

from functools import cache
from typing import Dict, Optional

# Lower-case ISO 4217 code -> display symbol. Many symbols are shared.
CURRENCY_CODE_TO_SYMBOL: Dict[str, str] = {
    "aed": "د.إ",
    "afn": "؋",
    "all": "Lek",
    "amd": "դր.",
    "ars": "$",
    "aud": "$",
    "azn": "ман.",
    "bam": "KM",
    "bdt": "৳",
    "bgn": "лв.",
    "bhd": "د.ب.",
    "bif": "FBu",
    "bnd": "$",
    "bob": "Bs",
    "brl": "R$",
    "bwp": "P",
    "byn": "руб.",
    "bzd": "$",
    "cad": "$",
    "cdf": "FrCD",
    "chf": "CHF",
    "clp": "$",
    "cny": "¥",
    "cop": "$",
    "crc": "₡",
    "cup": "$",
    "cve": "CV$",
    "czk": "Kč",
    "djf": "Fdj",
    "dkk": "kr",
    "dop": "RD$",
    "dzd": "د.ج.",
    "egp": "ج.م.",
    "etb": "Br",
    "eur": "€",
    "gbp": "£",
    "gel": "GEL",
    "ghs": "GH₵",
    "gnf": "FG",
    "gtq": "Q",
    "hkd": "$",
    "hnl": "L",
    "huf": "Ft",
    "idr": "Rp",
    "ils": "₪",
    "inr": "₹",
    "iqd": "د.ع.",
    "irr": "﷼",
    "isk": "kr",
    "jmd": "$",
    "jod": "د.أ.",
    "jpy": "¥",
    "kes": "Ksh",
    "khr": "៛",
    "kmf": "FC",
    "krw": "₩",
    "kwd": "د.ك.",
    "kzt": "тңг.",
    "lbp": "ل.ل.",
    "lkr": "Rs",
    "lyd": "د.ل.",
    "mad": "د.م.",
    "mdl": "MDL",
    "mga": "MGA",
    "mkd": "MKD",
    "mmk": "K",
    "mop": "MOP$",
    "mur": "MURs",
    "mxn": "$",
    "myr": "RM",
    "mzn": "MTn",
    "nad": "N$",
    "ngn": "₦",
    "nio": "C$",
    "nok": "kr",
    "npr": "Rs",
    "nzd": "$",
    "omr": "ر.ع.",
    "pab": "B/.",
    "pen": "S/.",
    "php": "₱",
    "pkr": "₨",
    "pln": "zł",
    "pyg": "₲",
    "qar": "ر.ق.",
    "ron": "RON",
    "rsd": "дин.",
    "rub": "₽",
    "rwf": "FR",
    "sar": "﷼",
    "sdg": "SDG",
    "sek": "kr",
    "sgd": "$",
    "sos": "Ssh",
    "thb": "฿",
    "tnd": "د.ت.",
    "top": "T$",
    "try": "₺",
    "ttd": "$",
    "twd": "NT$",
    "tzs": "TSh",
    "uah": "₴",
    "ugx": "USh",
    "usd": "$",
    "uyu": "$",
    "uzs": "UZS",
    "vnd": "₫",
    "xaf": "FCFA",
    "xcd": "EC$",
    "xof": "CFA",
    "yer": "ر.ي.",
    "zar": "R",
}

# Codes that win when several codes share one symbol (e.g. "$" -> USD)
PREFERRED_CODES = ["usd", "cny", "gbp", "eur"]


def code_to_symbol(code: str) -> Optional[str]:
    """Return the display symbol for an ISO code (case-insensitive), or None."""
    if not code:
        return None
    return CURRENCY_CODE_TO_SYMBOL.get(code.strip().lower())


@cache
def _symbol_index() -> Dict[str, str]:
    """Build the symbol -> upper-case ISO code index once per process.

    Bulk pass first (last code in table order wins a shared symbol), then
    the preferred codes are applied so they win their ties.
    """
    index = {}
    for code, symbol in CURRENCY_CODE_TO_SYMBOL.items():
        index[symbol] = code.upper()
    for code in PREFERRED_CODES:
        symbol = CURRENCY_CODE_TO_SYMBOL.get(code)
        if symbol:
            index[symbol] = code.upper()
    return index


def symbol_to_code(symbol: str) -> Optional[str]:
    """Return the upper-case ISO code for a symbol, or None if unknown."""
    return _symbol_index().get(symbol)
