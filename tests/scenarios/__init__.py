"""End-to-end scenarios for htmx middleware.

Each scenario runs a FastAPI application with the middleware installed and
checks the response headers seen by an htmx client.
"""
