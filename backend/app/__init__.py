"""La Meca CDA dashboard backend: FastAPI app, models and aggregation services."""
