"""HTTP surface: FastAPI app factory, RPC router and page routes."""
