"""
Top‑level routers of the demo services.

Each demo is a separate application, so each gets its own router
aggregating its endpoint modules.  ``main`` includes exactly one of
them per application.
"""

from fastapi import APIRouter

from .endpoints import counter, message

counter_router = APIRouter()
counter_router.include_router(counter.router, tags=["counter"])

message_router = APIRouter()
message_router.include_router(message.router, tags=["message"])
