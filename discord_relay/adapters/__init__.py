"""Adapters — Discord, webhook relay and web (FastAPI)."""
