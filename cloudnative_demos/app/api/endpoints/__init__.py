"""
Endpoint modules.

Each module in this package defines an ``APIRouter`` for one demo
service.  The routers are aggregated in ``api/router.py`` and then
included in the application built by ``main``.
"""
