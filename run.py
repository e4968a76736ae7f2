"""Unified entry point for the demo services.

This script launches both the stateless counter service and the
configuration message service concurrently, each on its own port.
It is intended to be executed from the project root, for example in
a container where you only specify a single Python file to run.

Configuration such as REDIS_URL, CONFIG_SERVER_URL and the ports is
read from environment variables.  See ``cloudnative_demos.app.core.config``
for the list of supported variables.

Both applications are created before anything is served, so a host
that cannot resolve its own name (or a fail‑fast config server error)
stops the process before it accepts a single request.

Usage:
    python run.py
"""
import asyncio
import logging
import sys

from fastapi import FastAPI
from uvicorn import Config, Server

from cloudnative_demos.app.core.config import settings
from cloudnative_demos.app.core.logging_config import setup_logging
from cloudnative_demos.app.main import create_counter_app, create_message_app


async def serve(app: FastAPI, host: str, port: int) -> None:
    """Serve ``app`` with uvicorn until shutdown."""
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    await Server(config).serve()


async def main() -> int:
    """Run both services concurrently; stop both if one fails."""
    setup_logging(settings.log_level, settings.log_file or None)
    counter_app = create_counter_app(settings)
    message_app = create_message_app(settings)

    tasks = [
        asyncio.create_task(serve(counter_app, settings.counter_host, settings.counter_port)),
        asyncio.create_task(serve(message_app, settings.message_host, settings.message_port)),
    ]
    done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    exit_code = 0
    for task in done:
        if exception := task.exception():
            logging.exception("Exception in service", exc_info=exception)
            exit_code = 1
    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)
    return exit_code


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        pass
