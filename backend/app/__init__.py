"""Signal Sync backend: alert ingestion and the correlated signal dashboard."""
