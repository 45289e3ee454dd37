"""Quote endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ...exceptions import QuoteError, QuoteValidationError
from ...schemas.quote import QuoteRequest, QuoteResponse, QuoteSummaryResponse
from ...services.quotes.service import create_quote, create_quote_summary

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quotes", tags=["quotes"])


def _error_response(status_code: int, error: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "detail": detail})


def _handle_failure(exc: Exception) -> JSONResponse:
    if isinstance(exc, QuoteValidationError):
        return _error_response(status.HTTP_400_BAD_REQUEST, exc.error, exc.message)
    if isinstance(exc, QuoteError):
        logger.exception(f"Quote failed: {exc}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.error, exc.message)
    logger.exception(f"Unexpected error while quoting: {exc}")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal error", str(exc))


@router.post("", response_model=QuoteResponse, status_code=status.HTTP_200_OK)
def calculate(payload: QuoteRequest):
    try:
        return create_quote(payload)
    except Exception as exc:
        return _handle_failure(exc)


@router.post("/summary", response_model=QuoteSummaryResponse, status_code=status.HTTP_200_OK)
def summary(payload: QuoteRequest):
    """Customer-facing view: internal lines hidden, zero lines dropped."""
    try:
        return create_quote_summary(payload)
    except Exception as exc:
        return _handle_failure(exc)
