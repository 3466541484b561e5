"""
Request correlation ids.

Each HTTP request (and each sync run started from it) carries one id so
log lines from the API, the Xero connector and SP-API calls can be tied
together. Callers may pass their own id in ``X-Correlation-ID``; ids that
are empty, too long or contain non-token characters are replaced.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import re
import uuid
from contextvars import ContextVar

CORRELATION_HEADER = "X-Correlation-ID"

_ACCEPTED_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

_current_id: ContextVar[str] = ContextVar("fluxori_correlation_id", default="")


def is_acceptable_correlation_id(value: str | None) -> bool:
    return bool(value) and _ACCEPTED_ID.match(value) is not None


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Bind a correlation id to the current context.

    A caller-supplied id is kept only when it is acceptable; otherwise a
    fresh uuid4 is bound.

    Returns:
        The id now in effect
    """
    value = correlation_id if is_acceptable_correlation_id(correlation_id) else uuid.uuid4().hex
    _current_id.set(value)
    return value


def get_correlation_id() -> str:
    """Id bound to the current context, "" when none is."""
    return _current_id.get()


def clear_correlation_id() -> None:
    _current_id.set("")
