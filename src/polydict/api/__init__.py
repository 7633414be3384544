"""HTTP API for polydict (FastAPI)."""
