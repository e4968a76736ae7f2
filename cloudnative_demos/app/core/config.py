"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so that
both demo services start against a local Redis and without a config
server.  Tests build their own ``Settings`` instances and pass them to
the application factories instead of mutating the environment.
"""

import os
from dataclasses import dataclass


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Cloud Native Demos")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Connection string of the shared session store.  Every instance of
    # the counter service must point at the same Redis database.
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    redis_key_prefix: str = os.getenv("REDIS_KEY_PREFIX", "cloudnative:session:")
    redis_socket_timeout: float = float(os.getenv("REDIS_SOCKET_TIMEOUT_SECONDS", "5"))
    redis_connect_timeout: float = float(os.getenv("REDIS_CONNECT_TIMEOUT_SECONDS", "5"))

    # Sessions expire after this many seconds without a write.
    session_timeout_seconds: int = int(os.getenv("SESSION_TIMEOUT_SECONDS", "1800"))
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "SESSION")
    session_header_name: str = os.getenv("SESSION_HEADER_NAME", "X-Auth-Token")

    # When enabled the counter is advanced with the store's atomic
    # increment instead of a read followed by a write.
    counter_atomic_increment: bool = _env_bool("COUNTER_ATOMIC_INCREMENT")

    # Fallback value of the ``message`` property when no config server
    # is configured or the server does not define it.
    default_message: str = os.getenv("MESSAGE", "Hello default!")

    # Base URL of the config server, e.g. ``http://localhost:8888``.
    # Leave empty to serve ``default_message`` only.
    config_server_url: str = os.getenv("CONFIG_SERVER_URL", "")
    config_application_name: str = os.getenv("CONFIG_APPLICATION_NAME", "app")
    config_profile: str = os.getenv("CONFIG_PROFILE", "default")
    config_request_timeout: float = float(os.getenv("CONFIG_REQUEST_TIMEOUT_SECONDS", "5"))
    # Seconds between background refreshes; ``0`` disables polling and
    # leaves refreshes to ``POST /actuator/refresh``.
    config_poll_interval: float = float(os.getenv("CONFIG_POLL_INTERVAL_SECONDS", "0"))
    config_fail_fast: bool = _env_bool("CONFIG_FAIL_FAST")

    counter_host: str = os.getenv("COUNTER_HOST", "0.0.0.0")
    counter_port: int = int(os.getenv("COUNTER_PORT", "8080"))
    message_host: str = os.getenv("MESSAGE_HOST", "0.0.0.0")
    message_port: int = int(os.getenv("MESSAGE_PORT", "8081"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at import time, environment variables should be set
# before importing this module.
settings = Settings()
