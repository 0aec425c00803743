"""Web rendering and command layer (FastAPI)."""
