"""QuickBooks OAuth flow and FastAPI dependency wiring."""
