"""
Counter endpoint.

``GET /`` answers with the caller's session counter and the name of
the instance that served it, then advances the counter in the shared
session store.  The session identifier is returned as a cookie (and as
a header to callers using the header) so that the following request
reaches the same record, whichever instance handles it.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from cloudnative_demos.app.core.session import SessionHandle, attach_session, resolve_session
from cloudnative_demos.app.services.counter_service import CounterService

router = APIRouter()


def get_counter_service(request: Request) -> CounterService:
    """Dependency returning the counter service built by the application factory."""
    return request.app.state.counter_service


@router.get("/", response_class=PlainTextResponse)
async def increment_counter(
    request: Request,
    session: SessionHandle = Depends(resolve_session),
    service: CounterService = Depends(get_counter_service),
) -> PlainTextResponse:
    """Return ``Counter value from <host>: <n>`` and advance the counter."""
    body = await service.increment(session.session_id)
    response = PlainTextResponse(body)
    attach_session(response, session, request.app.state.settings)
    return response
