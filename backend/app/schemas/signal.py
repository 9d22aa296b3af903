"""
Signal-related Pydantic schemas for the Signal Sync API.

Handles the classified (not yet persisted) signal, the stored signal record
read back from the store, and the webhook acknowledgement payload.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from app.config.constants import SignalSource
from app.utils.time_utils import as_utc


class SignalCreate(BaseModel):
    """
    Fully-classified signal ready to be written to the store.

    Attributes:
        source: Which indicator sent the alert
        symbol: Upper-cased ticker
        reason: Free-text alert reason
        capital: Capital deployed in crores (Indicator2 only)
        date: UTC calendar date of ingestion
        time: UTC wall-clock time of ingestion
        created_at: Naive-UTC ingestion timestamp
    """

    model_config = ConfigDict(frozen=True)

    source: SignalSource
    symbol: str
    reason: str
    capital: Optional[float] = None
    date: dt.date
    time: dt.time
    created_at: dt.datetime


class SignalRecord(SignalCreate):
    """
    A signal as persisted, carrying its store-assigned id.

    created_at is UTC-aware here so every timestamp derived from a record
    serializes with an explicit offset.
    """

    id: int

    @field_validator("created_at")
    @classmethod
    def attach_utc(cls, value: dt.datetime) -> dt.datetime:
        return as_utc(value)


class WebhookAckData(BaseModel):
    """Normalised view of the stored signal echoed back to the sender."""

    id: int
    symbol: str
    source: SignalSource
    reason: str
    capital: Optional[float] = None
    timestamp: dt.datetime


class WebhookAck(BaseModel):
    """Successful ingestion response."""

    status: str = "success"
    message: str = "Signal processed successfully"
    data: WebhookAckData
