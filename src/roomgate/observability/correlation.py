"""Correlation ID management for request tracing.

The ID set by the HTTP middleware is forwarded on every outgoing call to the
reservation backend, so one guest action can be followed across services.
"""

import uuid
from contextvars import ContextVar, Token

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

CORRELATION_ID_HEADER = "X-Correlation-ID"


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def get_correlation_id() -> str:
    """Get current correlation ID from context."""
    return correlation_id_var.get()


def set_correlation_id(cid: str) -> Token[str]:
    return correlation_id_var.set(cid)


def reset_correlation_id(token: Token[str]) -> None:
    correlation_id_var.reset(token)


def outgoing_headers() -> dict[str, str]:
    """Headers to attach to outgoing requests, empty when no ID is set."""
    cid = get_correlation_id()
    return {CORRELATION_ID_HEADER: cid} if cid else {}
