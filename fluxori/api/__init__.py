"""
API routes module.

FastAPI application factory, dependency wiring and routers for all HTTP
endpoints.
"""
