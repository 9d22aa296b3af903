"""
Best-effort error recorder for Signal Sync.

PURPOSE: Persist unexpected failures to the debug_logs table so they can be
reproduced later. Recording is fire-and-forget: a failure while recording is
logged through structlog and never propagates to the caller.
"""

import traceback

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.debug_log import DebugLog
from app.utils.logger import get_logger
from app.utils.time_utils import get_utc_now, to_naive_utc


logger = get_logger("services.error_logger")

MAX_CONTEXT_LENGTH = 500


class ErrorLogger:
    """
    PURPOSE: Record (context, error, details) triples in the debug_logs table.

    CALLED BY: API routes as a background task after a failed request
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def record(self, context: str, error: BaseException, details: str = "") -> None:
        """
        Record an unexpected failure. Never raises.

        Args:
            context: Operation name, e.g. "webhook-handler"
            error: The failure being recorded
            details: Serialised input needed to reproduce the failure
        """
        message = str(error) or type(error).__name__
        stack_trace = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )

        logger.error(
            "error_recorded",
            context=context,
            error=message,
            exception_type=type(error).__name__,
        )

        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(
                        DebugLog(
                            timestamp=to_naive_utc(get_utc_now()),
                            context=context[:MAX_CONTEXT_LENGTH],
                            error_message=message,
                            details=details,
                            stack_trace=stack_trace,
                        )
                    )
        except Exception as log_error:
            logger.error(
                "error_log_write_failed",
                context=context,
                error=str(log_error),
                exception_type=type(log_error).__name__,
            )
