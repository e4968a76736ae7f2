"""
API package containing the HTTP routes of both demo services.

Each service exposes a top‑level router from ``router.py`` which
includes its endpoint modules from ``endpoints``.
"""
