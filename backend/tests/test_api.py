"""
PURPOSE: HTTP tests for the webhook, dashboard and health endpoints.

The application is wired to in-memory SQLite and FakeRedis; the lifespan
is not run.
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import select

from app.core.exceptions import StorageError
from app.models.debug_log import DebugLog


@pytest.mark.asyncio
async def test_webhook_accepts_indicator1(client):
    response = await client.post("/api/webhook", json={"scrip": "tcs", "reason": "Bullish breakout"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["data"]["symbol"] == "TCS"
    assert body["data"]["source"] == "Indicator1"
    assert body["data"]["reason"] == "Bullish breakout"
    assert body["data"]["capital"] is None
    assert body["data"]["id"] >= 1


@pytest.mark.asyncio
async def test_webhook_accepts_indicator2_with_capital(client):
    response = await client.post(
        "/api/webhook",
        json={"ticker": "nifty", "reason": "Oversold bounce", "capital_deployed_cr": 12.5},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["symbol"] == "NIFTY"
    assert data["source"] == "Indicator2"
    assert data["capital"] == 12.5


@pytest.mark.asyncio
async def test_webhook_accepts_json_sent_as_text_plain(client):
    response = await client.post(
        "/api/webhook",
        content=b'{"scrip": "infy", "reason": "bearish"}',
        headers={"Content-Type": "text/plain; charset=utf-8"},
    )

    assert response.status_code == 200
    assert response.json()["data"]["symbol"] == "INFY"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, message",
    [
        ({"reason": "Bullish breakout"}, "missing symbol field"),
        ({"scrip": "tcs"}, "missing reason"),
        ({}, "no data provided"),
    ],
)
async def test_webhook_rejects_invalid_payloads(client, payload, message):
    response = await client.post("/api/webhook", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == message


@pytest.mark.asyncio
async def test_webhook_rejects_non_json_body(client):
    response = await client.post(
        "/api/webhook",
        content=b"scrip=tcs&reason=x",
        headers={"Content-Type": "text/plain"},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_webhook_storage_failure_is_recorded(api_app, client, session_factory):
    store = api_app.state.signal_store
    with patch.object(store, "insert_signal", AsyncMock(side_effect=StorageError("db down"))):
        response = await client.post("/api/webhook", json={"scrip": "tcs", "reason": "x"})

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to process signal"

    async with session_factory() as session:
        logs = (await session.execute(select(DebugLog))).scalars().all()
    assert len(logs) == 1
    assert logs[0].context == "webhook-handler"
    assert logs[0].error_message == "db down"
    assert '"scrip": "tcs"' in logs[0].details


@pytest.mark.asyncio
async def test_dashboard_end_to_end_with_cache_header(client):
    await client.post("/api/webhook", json={"scrip": "tcs", "reason": "Bullish breakout"})
    await client.post("/api/webhook", json={"ticker": "tcs", "reason": "Bullish crossover"})

    first = await client.get("/api/dashboard")
    second = await client.get("/api/dashboard")

    assert first.status_code == 200
    assert first.headers["X-Cache"] == "MISS"
    assert second.headers["X-Cache"] == "HIT"
    assert first.json() == second.json()

    body = first.json()
    assert body["synced_list"] == [
        {
            "symbol": "TCS",
            "indicator1_reasons": ["Bullish breakout"],
            "indicator2_reasons": ["Bullish crossover"],
            "last_indicator1_time": body["synced_list"][0]["last_indicator1_time"],
            "last_indicator2_time": body["synced_list"][0]["last_indicator2_time"],
        }
    ]
    assert body["live_feed"][0]["status"] == "Synced"
    assert [e["symbol"] for e in body["logs"]["bullish"]] == ["TCS"]
    assert body["kpis"]["total_signals"] == 1
    assert body["kpis"]["synced_signals"] == 1
    assert set(body["logs"]) == {"hvd", "bullish", "bearish", "oversold", "overbought"}
    assert "generated_at" in body


def _is_utc(value: str) -> bool:
    return value.endswith("Z") or value.endswith("+00:00")


@pytest.mark.asyncio
async def test_timestamps_carry_utc_offset(client):
    ack = await client.post("/api/webhook", json={"ticker": "nifty", "reason": "Bullish hvd"})
    await client.post("/api/webhook", json={"scrip": "nifty", "reason": "Bullish breakout"})

    assert _is_utc(ack.json()["data"]["timestamp"])

    for attempt in ("MISS", "HIT"):
        response = await client.get("/api/dashboard")
        assert response.headers["X-Cache"] == attempt
        body = response.json()

        timestamps = [body["generated_at"], body["kpis"]["latest_signal"]["timestamp"]]
        timestamps += [entry["timestamp"] for entry in body["live_feed"]]
        timestamps += [entry["timestamp"] for bucket in body["logs"].values() for entry in bucket]
        timestamps += [entry["timestamp"] for entry in body["index_signals"]]
        for entry in body["synced_list"]:
            timestamps += [entry["last_indicator1_time"], entry["last_indicator2_time"]]

        assert len(timestamps) == 7
        assert all(_is_utc(ts) for ts in timestamps), timestamps


@pytest.mark.asyncio
async def test_dashboard_survives_cache_outage(client, fake_redis):
    fake_redis.fail = True
    await client.post("/api/webhook", json={"scrip": "tcs", "reason": "a"})

    response = await client.get("/api/dashboard")

    assert response.status_code == 200
    assert response.headers["X-Cache"] == "MISS"
    assert response.json()["kpis"]["total_signals"] == 1


@pytest.mark.asyncio
async def test_dashboard_storage_failure(api_app, client, session_factory):
    store = api_app.state.signal_store
    with patch.object(store, "query_signals", AsyncMock(side_effect=StorageError("timeout"))):
        response = await client.get("/api/dashboard")

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to retrieve dashboard data"
    assert "timeout" not in response.text

    async with session_factory() as session:
        logs = (await session.execute(select(DebugLog))).scalars().all()
    assert [log.context for log in logs] == ["api-dashboard"]


@pytest.mark.asyncio
async def test_health_ok(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["services"]["redis"]["status"] == "connected"


@pytest.mark.asyncio
async def test_health_degraded_when_redis_down(client, fake_redis):
    fake_redis.fail = True

    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["services"]["database"]["status"] == "connected"


@pytest.mark.asyncio
async def test_root(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["service"] == "Signal Sync API"
