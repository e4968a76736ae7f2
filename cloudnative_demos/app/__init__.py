"""
Application package initializer.

Two small services live here.  The counter service demonstrates
stateless session handling: its only state is kept in an external
session store shared by every instance.  The message service
demonstrates centralized configuration: it serves a property supplied
by a config server and can reload it without a restart.

Both services are built by factories in ``main`` so that tests and the
launcher can inject their own settings and collaborators.
"""

from .main import create_counter_app, create_message_app  # noqa: F401
