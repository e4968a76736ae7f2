"""
Session identity helpers for FastAPI routes.

A caller identifies its session either with the session cookie
(``SESSION`` by default) or with the session header (``X-Auth-Token``
by default), the header taking precedence.  Callers without either get
a freshly generated identifier.  ``resolve_session`` is a dependency
that returns a ``SessionHandle`` describing what was found, and
``attach_session`` writes the identifier back to the response so that
the next request reaches the same session record.

A supplied identifier longer than ``MAX_SESSION_ID_LENGTH`` or with
characters outside ``[A-Za-z0-9._~-]`` is ignored as if it were absent,
since it becomes part of the session store key.

The identifier is opaque here: the record itself lives in the session
store and nothing about it is cached in the process.
"""

import logging
import re
import uuid
from dataclasses import dataclass

from fastapi import Request, Response

from .config import Settings

logger = logging.getLogger(__name__)

MAX_SESSION_ID_LENGTH = 128
SESSION_ID_PATTERN = re.compile(r"[A-Za-z0-9._~-]+")


@dataclass(frozen=True)
class SessionHandle:
    """Identifier of the session a request belongs to."""

    session_id: str
    # True when the caller supplied no usable identifier.
    is_new: bool = False
    # True when the identifier came from the session header.
    via_header: bool = False


def new_session_id() -> str:
    """Generate a new opaque session identifier."""
    return str(uuid.uuid4())


def is_valid_session_id(value: str) -> bool:
    return len(value) <= MAX_SESSION_ID_LENGTH and SESSION_ID_PATTERN.fullmatch(value) is not None


def resolve_session(request: Request) -> SessionHandle:
    """Dependency returning the session handle of the current request."""
    settings: Settings = request.app.state.settings
    header_value = request.headers.get(settings.session_header_name)
    if header_value:
        if is_valid_session_id(header_value):
            return SessionHandle(session_id=header_value, via_header=True)
        logger.warning("Ignoring malformed session header (%d characters)", len(header_value))
    cookie_value = request.cookies.get(settings.session_cookie_name)
    if cookie_value:
        if is_valid_session_id(cookie_value):
            return SessionHandle(session_id=cookie_value)
        logger.warning("Ignoring malformed session cookie (%d characters)", len(cookie_value))
    return SessionHandle(session_id=new_session_id(), is_new=True)


def attach_session(response: Response, handle: SessionHandle, settings: Settings) -> None:
    """Return the session identifier to the caller on ``response``.

    The cookie is always set; the header is echoed only to callers
    that used the header in the first place.
    """
    response.set_cookie(
        key=settings.session_cookie_name,
        value=handle.session_id,
        path="/",
        httponly=True,
        samesite="lax",
    )
    if handle.via_header:
        response.headers[settings.session_header_name] = handle.session_id
