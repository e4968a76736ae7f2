"""
Entrypoints for the demo services.

This module assembles the two FastAPI applications.  Each factory
performs the one‑time setup of its service (logging, collaborators,
routes, lifecycle hooks) and returns an application ready to be
served.  The factories accept their collaborators as optional
arguments so that tests can inject doubles; production code lets them
build the real ones from ``Settings``.

Run a single service with uvicorn's factory mode, e.g.::

    uvicorn cloudnative_demos.app.main:create_counter_app --factory --port 8080

or both at once with ``python run.py``.
"""

import asyncio
import contextlib
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .api.router import counter_router, message_router
from .core.config import Settings, settings as default_settings
from .core.exceptions import SessionStoreError
from .core.hostname import resolve_host_name
from .core.logging_config import setup_logging
from .core.session_store import RedisSessionStore, SessionStore, create_redis_client
from .services.config_service import ConfigSource, build_config_source, poll_config
from .services.counter_service import CounterService

logger = logging.getLogger(__name__)


def create_counter_app(
    settings: Optional[Settings] = None,
    store: Optional[SessionStore] = None,
    host_name: Optional[str] = None,
) -> FastAPI:
    """Create the stateless counter application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use; defaults to the environment based ``settings``.
    store : Optional[SessionStore]
        Session store; a ``RedisSessionStore`` on ``settings.redis_url``
        is created if omitted and closed on shutdown.
    host_name : Optional[str]
        Host identity to report; resolved from the network if omitted.

    Raises
    ------
    HostResolutionError
        If the host identity cannot be resolved.  No application is
        created, so nothing is ever served.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    host_name = host_name or resolve_host_name()
    logger.info("Counter service running on host %s", host_name)

    owns_store = store is None
    if store is None:
        store = RedisSessionStore(create_redis_client(settings), settings.redis_key_prefix)

    app = FastAPI(title=f"{settings.project_name} - Counter", version=settings.api_version)
    app.state.settings = settings
    app.state.counter_service = CounterService(
        store,
        host_name,
        session_ttl=settings.session_timeout_seconds,
        atomic=settings.counter_atomic_increment,
    )
    app.include_router(counter_router)

    @app.exception_handler(SessionStoreError)
    async def session_store_error_handler(request: Request, exc: SessionStoreError) -> PlainTextResponse:
        logger.error("Session store unavailable while handling %s: %s", request.url.path, exc.message)
        return PlainTextResponse("Session store unavailable", status_code=503)

    if owns_store:
        @app.on_event("shutdown")
        async def close_store() -> None:
            await store.close()

    return app


def create_message_app(
    settings: Optional[Settings] = None,
    source: Optional[ConfigSource] = None,
) -> FastAPI:
    """Create the centralized configuration application.

    When ``source`` is omitted the config source is chosen from
    ``settings``: a config server if ``config_server_url`` is set,
    otherwise the local default message.  With a positive
    ``config_poll_interval`` the source is refreshed in the background
    for the lifetime of the application.

    Raises
    ------
    ConfigurationError
        If ``config_fail_fast`` is set and the config server cannot
        supply the properties.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    if source is None:
        source = build_config_source(settings)

    app = FastAPI(title=f"{settings.project_name} - Message", version=settings.api_version)
    app.state.settings = settings
    app.state.config_source = source
    app.include_router(message_router)

    if settings.config_poll_interval > 0:
        @app.on_event("startup")
        async def start_polling() -> None:
            app.state.poll_task = asyncio.create_task(poll_config(source, settings.config_poll_interval))
            logger.info("Polling configuration every %.1fs", settings.config_poll_interval)

        @app.on_event("shutdown")
        async def stop_polling() -> None:
            task = app.state.poll_task
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    return app
