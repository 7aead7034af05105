"""HTTP API and page routers."""
