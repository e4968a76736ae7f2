"""
Top‑level package for the cloud‑native demo services.

This file makes ``cloudnative_demos`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``cloudnative_demos.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
