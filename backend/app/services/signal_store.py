"""
Signal store gateway for Signal Sync.

PURPOSE: Typed read/write access to persisted signals. No business logic;
every database failure is surfaced as StorageError.

CALLED BY: IngestionService (writes), DashboardService (reads), health route
"""

from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config.constants import SignalSource
from app.core.exceptions import StorageError
from app.models.signal import Signal
from app.schemas.signal import SignalCreate, SignalRecord
from app.utils.logger import get_logger


logger = get_logger("services.signal_store")

# Driver-level connection failures are not always wrapped by SQLAlchemy
_STORE_ERRORS = (SQLAlchemyError, OSError)


class SignalStore:
    """
    Gateway over the signals table.

    PURPOSE: Insert classified signals and query one day's signals per source,
    newest first.

    Attributes:
        _session_factory: Async session factory created at application startup.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def insert_signal(self, signal: SignalCreate) -> SignalRecord:
        """
        Persist one signal and return it with its assigned id.

        The insert runs in its own transaction, so a failure leaves no row behind.

        Args:
            signal: Classified signal

        Returns:
            SignalRecord: The stored signal

        Raises:
            StorageError: If the write fails
        """
        row = Signal(
            date=signal.date,
            symbol=signal.symbol,
            indicator_type=signal.source.value,
            reason=signal.reason,
            time=signal.time,
            capital_deployed_cr=signal.capital,
            created_at=signal.created_at,
        )

        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(row)
                    await session.flush()
                    record_id = row.id
        except _STORE_ERRORS as e:
            logger.error(
                "signal_insert_failed",
                symbol=signal.symbol,
                source=signal.source.value,
                error=str(e),
                exception_type=type(e).__name__,
            )
            raise StorageError(f"failed to store signal: {e}") from e

        return SignalRecord(id=record_id, **signal.model_dump())

    async def query_signals(
        self,
        day: date,
        source: SignalSource,
        symbols: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> List[SignalRecord]:
        """
        Fetch one day's signals from one source, newest first.

        Args:
            day: Calendar date to scope the query
            source: Indicator to read
            symbols: Optional allow-list of symbols
            limit: Optional maximum number of rows

        Returns:
            list[SignalRecord]: Ordered by created_at descending, then id descending

        Raises:
            StorageError: If the query fails
        """
        stmt = (
            select(Signal)
            .where(Signal.date == day, Signal.indicator_type == source.value)
            .order_by(desc(Signal.created_at), desc(Signal.id))
        )
        if symbols is not None:
            stmt = stmt.where(Signal.symbol.in_(list(symbols)))
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rows = result.scalars().all()
        except _STORE_ERRORS as e:
            logger.error(
                "signal_query_failed",
                day=day.isoformat(),
                source=source.value,
                error=str(e),
                exception_type=type(e).__name__,
            )
            raise StorageError(f"failed to query signals: {e}") from e

        return [self._to_record(row) for row in rows]

    async def ping(self) -> None:
        """Round-trip a trivial query; raises StorageError when the store is unreachable."""
        try:
            async with self._session_factory() as session:
                await session.execute(select(1))
        except _STORE_ERRORS as e:
            raise StorageError(f"signal store unreachable: {e}") from e

    @staticmethod
    def _to_record(row: Signal) -> SignalRecord:
        return SignalRecord(
            id=row.id,
            source=SignalSource(row.indicator_type),
            symbol=row.symbol,
            reason=row.reason,
            capital=row.capital_deployed_cr,
            date=row.date,
            time=row.time,
            created_at=row.created_at,
        )
