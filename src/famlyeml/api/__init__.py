"""HTTP API for parsing enrollment emails."""

from famlyeml.api.endpoints import create_api_router

__all__ = ["create_api_router"]
