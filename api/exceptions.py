"""
API exception handlers.

This module provides custom exception handling for REST API responses.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from opentelemetry import trace
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    CommandChannelException,
    DomainException,
    LicenseManagerNotReadyError,
    ProviderNotSetError,
)

logger = logging.getLogger(__name__)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    if isinstance(exc, APIException):
        response = exception_handler(exc, context)
        if response:
            code = (
                exc.default_code.upper().replace("-", "_")
                if hasattr(exc, "default_code")
                else "API_ERROR"
            )
            response.data = {
                "error": {"code": code, "message": response.data.get("detail", exc.default_detail)}
            }
            if trace_id:
                response["X-Trace-ID"] = trace_id
            return response

    if isinstance(exc, Http404):
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    return _handle_unexpected_exception(exc, context, trace_id)


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID of the span serving the request."""
    if not context.get("request"):
        return None
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return None
    return format(span_context.trace_id, "032x")


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status.HTTP_400_BAD_REQUEST
    if isinstance(exc, LicenseManagerNotReadyError):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif isinstance(exc, CommandChannelException):
        status_code = status.HTTP_502_BAD_GATEWAY
    elif isinstance(exc, ProviderNotSetError):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response({"error": {"code": exc.code, "message": exc.message}}, status=status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    response = exception_handler(exc, context)
    if not response:
        response = Response(
            {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    else:
        response.data = {
            "error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}
        }
    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response
