"""HTTP delivery boundary: response headers and the FastAPI app."""
