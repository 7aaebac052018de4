"""HTTP server: FastAPI app, dependencies and routes."""
