"""
Message endpoints.

``GET /`` returns the current value of the ``message`` property.
``POST /actuator/refresh`` reloads the properties from the config
source and returns the names of those that changed; the next ``GET /``
serves the new value without a restart.
"""

from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from cloudnative_demos.app.services.config_service import ConfigSource

router = APIRouter()


def get_config_source(request: Request) -> ConfigSource:
    return request.app.state.config_source


@router.get("/", response_class=PlainTextResponse)
async def hello(source: ConfigSource = Depends(get_config_source)) -> str:
    return source.current_value()


@router.post("/actuator/refresh", response_model=List[str])
async def refresh(source: ConfigSource = Depends(get_config_source)) -> List[str]:
    """Reload configuration and list the changed property names.

    Fetching from a config server blocks, so it runs in the thread
    pool.
    """
    return await run_in_threadpool(source.refresh)
