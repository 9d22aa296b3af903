"""
PURPOSE: Signal ingestion webhook for Signal Sync.

Provides the public inbound endpoint that TradingView alert webhooks from both
indicators post to. The indicator is identified by the payload alone:
"scrip" for Indicator1, "ticker" for Indicator2.

TradingView posts valid JSON alert messages but may label them text/plain, so
the body is decoded here rather than by FastAPI's body parsing.

CALLED BY:
    - TradingView alert webhooks (POST, public)
"""

import json
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.background import BackgroundTask

from app.api.dependencies import get_error_logger, get_ingestion_service
from app.core.exceptions import StorageError, ValidationError
from app.core.rate_limit import limiter, WEBHOOK_LIMIT
from app.schemas.signal import WebhookAck, WebhookAckData
from app.services.error_logger import ErrorLogger
from app.services.ingestion_service import IngestionService
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/webhook", tags=["webhook"])

ERROR_CONTEXT = "webhook-handler"


# ════════════════════════════════════════════════════════════════
# Internal Helpers
# ════════════════════════════════════════════════════════════════


async def _decode_body(request: Request) -> Any:
    """
    PURPOSE: Decode the raw request body as JSON regardless of content type.

    Raises:
        HTTPException: 400 if the body is not valid JSON.
    """
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("webhook_body_not_json", length=len(raw))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="request body must be valid JSON",
        )


# ════════════════════════════════════════════════════════════════
# Public Inbound Endpoint
# ════════════════════════════════════════════════════════════════


@router.post("", response_model=WebhookAck)
@limiter.limit(WEBHOOK_LIMIT)
async def receive_signal(
    request: Request,
    ingestion: IngestionService = Depends(get_ingestion_service),
    error_logger: ErrorLogger = Depends(get_error_logger),
) -> Any:
    """
    PURPOSE: Receive one indicator alert, classify it and store it.

    Server time is stamped on the signal; any timestamp in the payload is ignored.

    Args:
        request: FastAPI Request (raw body; also required by slowapi).

    Returns:
        WebhookAck: {"status": "success", "message": ..., "data": {...}}

    Raises:
        HTTP 400: Body is not JSON, or has no scrip/ticker, or no reason.
        HTTP 429: Rate limit exceeded.
        HTTP 500: The signal could not be stored (recorded to debug_logs).
    """
    payload = await _decode_body(request)

    try:
        record = await ingestion.ingest(payload)
    except ValidationError as e:
        logger.warning("webhook_payload_rejected", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        logger.error("webhook_store_failed", error=str(e))
        content: Dict[str, Any] = {
            "error": "Internal server error",
            "message": "Failed to process signal",
        }
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
            background=BackgroundTask(
                error_logger.record,
                ERROR_CONTEXT,
                e,
                json.dumps(payload, default=str),
            ),
        )

    return WebhookAck(
        data=WebhookAckData(
            id=record.id,
            symbol=record.symbol,
            source=record.source,
            reason=record.reason,
            capital=record.capital,
            timestamp=record.created_at,
        )
    )
