"""API FastAPI gridcms."""
