"""
REST API Endpoints

Provides HTTP API for:
- Health checks
- Parsing an uploaded EML message into an enrollment record
"""

from fastapi import APIRouter, HTTPException
from loguru import logger
from pydantic import BaseModel, Field

from famlyeml.config import JSON_SECTIONS
from famlyeml.parsers.base import EnrollmentParseError
from famlyeml.services.enrollment_parser import parse_eml, parse_html
from famlyeml.services.record_export import record_section
from famlyeml.version import VERSION


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str = VERSION


class ParseRequest(BaseModel):
    """Parse request model."""

    content: str = Field(description="Raw EML message text (or HTML when is_html is set)")
    section: str = Field(default="all", description="Record section to return")
    is_html: bool = Field(default=False, description="Content is decoded HTML, not a message")


def create_api_router() -> APIRouter:
    """
    Create FastAPI router with all API endpoints.

    Returns:
        Configured APIRouter instance
    """
    router = APIRouter(prefix="/api")

    # -------------------------------------------------------------------------
    # Health Check
    # -------------------------------------------------------------------------

    @router.get("/health", response_model=HealthResponse)
    async def health_check():
        """
        Health check endpoint.

        Returns:
            Health status response
        """
        logger.debug("Health check requested")
        return HealthResponse(status="ok")

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    @router.post("/parse")
    def parse(request: ParseRequest) -> dict:
        """
        Parse an enrollment email.

        Each request is parsed independently; nothing is shared between
        calls.

        Args:
            request: Message content and requested section

        Returns:
            The record, or the requested section of it

        Raises:
            HTTPException: 400 for an unknown section, 422 when the message
                cannot be parsed (detail carries the error code)
        """
        if request.section not in JSON_SECTIONS:
            raise HTTPException(status_code=400, detail=f"Unknown section: {request.section}")

        try:
            record = parse_html(request.content) if request.is_html else parse_eml(request.content)
        except EnrollmentParseError as e:
            logger.warning(f"Parse request failed ({e.code}): {e}")
            raise HTTPException(status_code=422, detail={"code": e.code, "message": str(e)}) from e

        return record_section(record, request.section)

    return router
