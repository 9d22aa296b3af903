"""
PURPOSE: FastAPI dependencies that hand route handlers the services built by
the application lifespan (stored on app.state).
"""

from fastapi import Request

from app.services.cache_gateway import RedisCacheGateway
from app.services.dashboard_reader import CachedDashboardService
from app.services.error_logger import ErrorLogger
from app.services.ingestion_service import IngestionService
from app.services.signal_store import SignalStore


def get_signal_store(request: Request) -> SignalStore:
    return request.app.state.signal_store


def get_cache_gateway(request: Request) -> RedisCacheGateway:
    return request.app.state.cache_gateway


def get_ingestion_service(request: Request) -> IngestionService:
    return request.app.state.ingestion_service


def get_dashboard_reader(request: Request) -> CachedDashboardService:
    return request.app.state.dashboard_reader


def get_error_logger(request: Request) -> ErrorLogger:
    return request.app.state.error_logger
