"""
PURPOSE: Webhook module for Signal Sync — handles inbound TradingView indicator alerts.

Classifies raw alert payloads from the two indicators into typed signals ready
for the signal store.
"""

from app.webhook.classifier import classify_payload

__all__ = ["classify_payload"]
