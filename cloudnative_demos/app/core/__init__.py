"""
Core infrastructure shared by the demo services.

Configuration, logging, exceptions, host identity resolution and the
session store abstraction live here.  Nothing in this package knows
about HTTP routes.
"""
