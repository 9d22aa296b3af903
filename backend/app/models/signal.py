import datetime as dt
from typing import Optional

from sqlalchemy import Date, DateTime, Index, Integer, Numeric, String, Time
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Signal(Base):
    """One alert observed from either indicator. Append-only."""

    __tablename__ = "signals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    symbol: Mapped[str] = mapped_column(String(50), nullable=False)
    indicator_type: Mapped[str] = mapped_column(String(20), nullable=False)
    reason: Mapped[str] = mapped_column(String(500), nullable=False)
    time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    capital_deployed_cr: Mapped[Optional[float]] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=True
    )
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False)

    # Indexes
    __table_args__ = (
        Index("ix_signals_date_type_created", "date", "indicator_type", "created_at"),
        Index("ix_signals_date_symbol", "date", "symbol"),
    )
