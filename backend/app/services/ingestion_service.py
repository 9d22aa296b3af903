"""
Ingestion service for Signal Sync.

PURPOSE: Classify an inbound alert and append it to the signal store.

CALLED BY: POST /api/webhook
"""

from datetime import datetime
from typing import Any, Optional

from app.schemas.signal import SignalRecord
from app.services.signal_store import SignalStore
from app.utils.logger import get_logger
from app.webhook.classifier import classify_payload


logger = get_logger("services.ingestion")


class IngestionService:
    """
    PURPOSE: Classifier → store write pipeline for one webhook call.

    Validation happens before any write, so a rejected payload never touches
    the store. Duplicate alerts are stored as separate rows.
    """

    def __init__(self, store: SignalStore) -> None:
        self._store = store

    async def ingest(self, payload: Any, now: Optional[datetime] = None) -> SignalRecord:
        """
        Classify and persist one alert.

        Args:
            payload: Decoded webhook body
            now: Server clock override (tests)

        Returns:
            SignalRecord: The stored signal

        Raises:
            ValidationError: If the payload is malformed
            StorageError: If the write fails
        """
        signal = classify_payload(payload, now=now)

        logger.info(
            "signal_classified",
            source=signal.source.value,
            symbol=signal.symbol,
            reason=signal.reason,
        )

        record = await self._store.insert_signal(signal)

        logger.info(
            "signal_ingested",
            signal_id=record.id,
            source=record.source.value,
            symbol=record.symbol,
        )
        return record
