"""
Business logic layer for Signal Sync.

PURPOSE: Services sit between the API routes and the store/cache gateways.
They own no global state; every client handle is injected at construction.

CALLED BY: API routes in app.api

Services:
    - SignalStore: Signal persistence gateway
    - RedisCacheGateway: Dashboard cache gateway
    - ErrorLogger: Best-effort failure recorder
    - IngestionService: Classify and store inbound alerts
    - DashboardService: Correlated dashboard assembly
    - CachedDashboardService: Cache-aside front for the dashboard
"""

from app.services.signal_store import SignalStore
from app.services.cache_gateway import RedisCacheGateway
from app.services.error_logger import ErrorLogger
from app.services.ingestion_service import IngestionService
from app.services.dashboard_service import DashboardService
from app.services.dashboard_reader import CachedDashboardService

__all__ = [
    "SignalStore",
    "RedisCacheGateway",
    "ErrorLogger",
    "IngestionService",
    "DashboardService",
    "CachedDashboardService",
]
