"""Last-price lookup against the Tencent securities quote service.

Two interchangeable endpoints serve the same payload: a single assignment
line per symbol, e.g.

    v_hk00700="100~TENCENT~00700~321.00~318.60~...";

The fourth tilde-separated field (index 3) is the last traded price.

Lookup order:
1. primary endpoint (qt.gtimg.cn)
2. backup endpoint (sqt.gtimg.cn)
3. the caller's fallback price

Given a fallback price, retrieval never raises: transport and payload
errors are logged and the next tier is tried.
"""

import logging
import math
import os
import re
from typing import List, Optional, Tuple

import requests

from .schemas import PriceQuote
from .symbols import normalize_symbol

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

PRIMARY_URL = "https://qt.gtimg.cn/q={symbol}"
BACKUP_URL = "https://sqt.gtimg.cn/utf8/q={symbol}"

DEFAULT_TIMEOUT_SEC = 6

PRICE_FIELD_INDEX = 3

_PAYLOAD_RE = re.compile(r'="([^"]+)"')


class QuoteError(Exception):
    """Base class for quote lookup failures."""
    pass


class QuoteNetworkError(QuoteError):
    """Request failed at the transport or HTTP level."""
    pass


class QuoteParseError(QuoteError):
    """Response did not contain a usable price."""
    pass


def parse_quote_fields(text: str) -> List[str]:
    """Extract the tilde-separated fields from a quote response.

    Raises:
        QuoteParseError: If no quoted payload is present
    """
    match = _PAYLOAD_RE.search(text or "")
    if not match:
        raise QuoteParseError("No quoted payload in response")
    return match.group(1).split("~")


def parse_quote_response(text: str) -> float:
    """Parse the last traded price out of a quote response.

    Args:
        text: Raw response body, e.g. 'v_hk00700="100~TENCENT~00700~321.00~...";'

    Returns:
        The price at field index 3.

    Raises:
        QuoteParseError: If the payload is missing, has fewer than 4 fields,
            or field 3 is not a positive finite number
    """
    fields = parse_quote_fields(text)

    if len(fields) <= PRICE_FIELD_INDEX:
        raise QuoteParseError(
            f"Expected at least {PRICE_FIELD_INDEX + 1} fields, got {len(fields)}"
        )

    raw = fields[PRICE_FIELD_INDEX].strip()
    try:
        price = float(raw)
    except ValueError:
        raise QuoteParseError(f"Price field is not numeric: '{raw}'")

    if not math.isfinite(price) or price <= 0:
        raise QuoteParseError(f"Price field is not a positive number: '{raw}'")

    return price


def _request_quote(session: requests.Session, url: str, timeout: float) -> str:
    """GET a quote URL and return the body text.

    Raises:
        QuoteNetworkError: On transport failure or an HTTP error status
    """
    try:
        r = session.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise QuoteNetworkError(f"Request to {url} failed: {e}") from e

    if r.status_code >= 400:
        raise QuoteNetworkError(f"Request to {url} returned HTTP {r.status_code}")

    return r.text or ""


def _fetch_from(session: requests.Session, url: str, timeout: float) -> Tuple[float, Optional[str]]:
    """Fetch one endpoint and return (price, instrument name)."""
    text = _request_quote(session, url, timeout)
    logger.debug(f"Quote response from {url}: {text[:100]}")
    price = parse_quote_response(text)
    fields = parse_quote_fields(text)
    name = fields[1].strip() if len(fields) > 1 else None
    return price, name or None


def fetch_quote(
    symbol: str,
    fallback: Optional[float],
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> PriceQuote:
    """Fetch the latest price for a ticker, falling back instead of failing.

    Tries the primary endpoint, then the backup endpoint, one request each.
    If both fail, the fallback price is returned with source "fallback".

    Args:
        symbol: User-facing ticker (e.g. "0700", "9863.hk", "600000.sh")
        fallback: Price to use when no quote can be fetched. With None,
            a failed lookup raises instead.
        session: Optional requests session (a private one is used otherwise)
        timeout: Per-request timeout in seconds (default 6)

    Returns:
        PriceQuote with the price and the tier that produced it

    Raises:
        ValueError: If the fallback price is not a positive number
        QuoteError: If both endpoints fail and no fallback was given
    """
    if fallback is not None and (not math.isfinite(fallback) or fallback <= 0):
        raise ValueError(f"fallback price must be positive, got {fallback}")

    quote_symbol = normalize_symbol(symbol)
    timeout = DEFAULT_TIMEOUT_SEC if timeout is None else timeout

    tiers = [
        ("primary", PRIMARY_URL.format(symbol=quote_symbol)),
        ("backup", BACKUP_URL.format(symbol=quote_symbol)),
    ]

    owns_session = session is None
    if owns_session:
        session = requests.Session()

    try:
        for source, url in tiers:
            try:
                price, name = _fetch_from(session, url, timeout)
            except QuoteError as e:
                logger.warning(f"{quote_symbol}: {source} quote failed: {e}")
                continue

            logger.info(f"{quote_symbol}: {source} quote {price}")
            return PriceQuote(
                symbol=symbol, quote_symbol=quote_symbol, price=price, source=source, name=name,
            )
    finally:
        if owns_session:
            session.close()

    if fallback is None:
        raise QuoteError(f"No quote available for {quote_symbol}")

    logger.warning(f"{quote_symbol}: all quote sources failed, using fallback price {fallback}")
    return PriceQuote(symbol=symbol, quote_symbol=quote_symbol, price=fallback, source="fallback")


def fetch_price(
    symbol: str,
    fallback: float,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> float:
    """Fetch the latest price for a ticker; returns `fallback` if lookup fails."""
    return fetch_quote(symbol, fallback, session=session, timeout=timeout).price
