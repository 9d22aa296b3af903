"""
PURPOSE: Rate limiting configuration for the Signal Sync API using slowapi.

Provides a shared Limiter instance keyed by client IP address and
pre-defined rate limit strings for different endpoint categories:
    - WEBHOOK_LIMIT: generous (120/minute) — inbound alert webhooks
    - READ_LIMIT:    relaxed  (60/minute)  — dashboard and health reads
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Shared limiter instance — keyed by client IP
limiter = Limiter(key_func=get_remote_address)

# ── Rate limit tiers ──────────────────────────────────────────
WEBHOOK_LIMIT = "120/minute"
READ_LIMIT = "60/minute"
