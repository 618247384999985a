"""Ticker symbol handling for the Tencent quote service.

The quote service addresses instruments by a market prefix plus the exchange
code, e.g. hk00700, sh600000, sz000001. Users type tickers the way brokers
show them (700, 9863.hk, 600000.sh), so they are converted here.
"""

HK_CODE_WIDTH = 5

# Market suffix -> provider prefix. Checked in this order.
MARKET_SUFFIXES = (
    (".hk", "hk"),
    (".sh", "sh"),
    (".sz", "sz"),
)

CURRENCY_SYMBOLS = {
    "hk": "HK$",
}
DEFAULT_CURRENCY_SYMBOL = "¥"


def _split_market(symbol: str):
    """Split a lower-cased symbol into (code, market) using its suffix.

    Returns (symbol, None) when no recognized suffix is present.
    """
    for suffix, market in MARKET_SUFFIXES:
        if symbol.endswith(suffix):
            return symbol[: -len(suffix)], market
    return symbol, None


def _hk_symbol(code: str) -> str:
    return f"hk{code.rjust(HK_CODE_WIDTH, '0')}"


def normalize_symbol(symbol: str) -> str:
    """Convert a user-facing ticker into the quote service's symbol format.

    Rules (suffix match is case-insensitive):
    - ``<code>.hk``: code left-padded with zeros to 5 chars, prefixed ``hk``
    - ``<code>.sh`` / ``<code>.sz``: exchange code prefixed with ``sh`` / ``sz``;
      a code already carrying the prefix is kept as is
    - no recognized suffix: treated as a Hong Kong code

    Malformed codes are passed through; the quote service does its own
    validation and a bad symbol simply fails to parse.

    Examples:
        >>> normalize_symbol("9863.HK")
        'hk09863'
        >>> normalize_symbol("600000.sh")
        'sh600000'
        >>> normalize_symbol("700")
        'hk00700'
    """
    s = str(symbol or "").strip().lower()
    code, market = _split_market(s)

    if market == "hk":
        return _hk_symbol(code)

    if market in ("sh", "sz"):
        if code.startswith(market):
            return code
        return f"{market}{code}"

    return _hk_symbol(code)


def currency_symbol(symbol: str) -> str:
    """Display currency symbol for a ticker.

    Only tickers explicitly suffixed ``.hk`` show HK$; everything else
    shows the yuan sign. Amounts are never converted.
    """
    s = str(symbol or "").strip().lower()
    _, market = _split_market(s)
    return CURRENCY_SYMBOLS.get(market, DEFAULT_CURRENCY_SYMBOL)
