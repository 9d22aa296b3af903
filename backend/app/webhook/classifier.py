"""
PURPOSE: Classify raw TradingView alert payloads into typed signals.

Indicator1 alerts carry a "scrip" key, Indicator2 alerts a "ticker" key; the
source kind is decided only by which key is present. Timestamps always come
from the server clock so untrusted senders cannot skew daily grouping.

CALLED BY:
    - app/services/ingestion_service.py (IngestionService.ingest)
"""

import math
from datetime import datetime
from typing import Any, Optional, Tuple

from app.config.constants import (
    CAPITAL_DECIMAL_PLACES,
    CAPITAL_FIELD,
    MAX_CAPITAL_ABS,
    MAX_REASON_LENGTH,
    MAX_SYMBOL_LENGTH,
    REASON_FIELD,
    SCRIP_FIELD,
    TICKER_FIELD,
    SignalSource,
)
from app.core.exceptions import ValidationError
from app.schemas.signal import SignalCreate
from app.utils.time_utils import get_utc_now, to_naive_utc


# ════════════════════════════════════════════════════════════════
# Public API
# ════════════════════════════════════════════════════════════════


def classify_payload(payload: Any, now: Optional[datetime] = None) -> SignalCreate:
    """
    PURPOSE: Turn an inbound alert mapping into a SignalCreate or reject it.

    Any client-supplied timestamp in the payload is ignored.

    Args:
        payload: Decoded JSON body of the webhook request.
        now: Server clock override (tests); defaults to the current UTC time.

    Returns:
        SignalCreate: Normalised signal with date, time and created_at set.

    Raises:
        ValidationError: If the payload has no symbol field, no reason, or
            an unusable capital figure.

    Examples:
        {"scrip": "tcs", "reason": "Bullish breakout"}   → Indicator1 / TCS
        {"ticker": "nifty", "reason": "Oversold bounce"} → Indicator2 / NIFTY
    """
    if not isinstance(payload, dict) or not payload:
        raise ValidationError("no data provided")

    source, symbol = _resolve_source(payload)
    reason = _resolve_reason(payload)

    capital = None
    if source is SignalSource.INDICATOR2:
        capital = _parse_capital(payload.get(CAPITAL_FIELD))

    created_at = to_naive_utc(now or get_utc_now())

    return SignalCreate(
        source=source,
        symbol=symbol,
        reason=reason,
        capital=capital,
        date=created_at.date(),
        time=created_at.time(),
        created_at=created_at,
    )


# ════════════════════════════════════════════════════════════════
# Internal Helpers
# ════════════════════════════════════════════════════════════════


def _resolve_source(payload: dict) -> Tuple[SignalSource, str]:
    """Pick the source kind from the symbol key present; "scrip" wins over "ticker"."""
    for field, source in ((SCRIP_FIELD, SignalSource.INDICATOR1),
                          (TICKER_FIELD, SignalSource.INDICATOR2)):
        raw = payload.get(field)
        if raw is None or isinstance(raw, (dict, list, bool)):
            continue
        symbol = str(raw).strip().upper()
        if not symbol:
            continue
        if len(symbol) > MAX_SYMBOL_LENGTH:
            raise ValidationError(f"symbol exceeds {MAX_SYMBOL_LENGTH} characters")
        return source, symbol

    raise ValidationError("missing symbol field")


def _resolve_reason(payload: dict) -> str:
    reason = payload.get(REASON_FIELD)
    if not isinstance(reason, str) or not reason.strip():
        raise ValidationError("missing reason")
    reason = reason.strip()
    if len(reason) > MAX_REASON_LENGTH:
        raise ValidationError(f"reason exceeds {MAX_REASON_LENGTH} characters")
    return reason


def _parse_capital(raw: Any) -> Optional[float]:
    """
    Accept ints, floats and numeric strings; None or "" means not supplied.

    The value is rounded to the column scale so the stored figure and the
    acknowledged one agree.
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        raise ValidationError(f"{CAPITAL_FIELD} must be numeric")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{CAPITAL_FIELD} must be numeric") from None
    if not math.isfinite(value):
        raise ValidationError(f"{CAPITAL_FIELD} must be numeric")
    value = round(value, CAPITAL_DECIMAL_PLACES)
    if abs(value) >= MAX_CAPITAL_ABS:
        raise ValidationError(f"{CAPITAL_FIELD} must be below {MAX_CAPITAL_ABS:,}")
    return value
