"""Application layer: per-connection state and service orchestration."""
