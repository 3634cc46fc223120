"""HTTP boundary for TaskHub (FastAPI)."""
