"""API layer package for the FastAPI application, routers and session checks."""

from .application import create_api_application

__all__ = ["create_api_application"]
