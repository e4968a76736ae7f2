"""
Service layer for centralized configuration.

The message demo serves a single ``message`` property.  Where that
value comes from is hidden behind the ``ConfigSource`` capability:

* ``StaticConfigSource`` always returns the locally configured value.
* ``RemoteConfigSource`` loads the properties from a config server and
  keeps the last successfully fetched set in memory.  ``refresh``
  fetches them again and reports which properties changed, so a new
  value takes effect without restarting the process.

``poll_config`` refreshes a source periodically; the message
application runs it as a background task when polling is enabled.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Protocol

import requests
from starlette.concurrency import run_in_threadpool

from cloudnative_demos.app.core.config import Settings
from cloudnative_demos.app.core.exceptions import ConfigurationError
from cloudnative_demos.app.schemas.config import ConfigEnvironment

logger = logging.getLogger(__name__)

MESSAGE_PROPERTY = "message"
DEFAULT_MESSAGE = "Hello default!"


class ConfigSource(Protocol):
    """Capability returning the current value of the ``message`` property."""

    def current_value(self) -> str:
        ...

    def refresh(self) -> List[str]:
        """Reload the properties and return the names of those that changed."""
        ...


class StaticConfigSource:
    """Config source with a fixed value."""

    def __init__(self, value: str = DEFAULT_MESSAGE):
        self.value = value

    def current_value(self) -> str:
        return self.value

    def refresh(self) -> List[str]:
        return []


class RemoteConfigSource:
    """Config source backed by a config server.

    Parameters
    ----------
    base_url : str
        Base URL of the config server, e.g. ``http://localhost:8888``.
    application : str
        Application name the properties are looked up for.
    profile : str
        Active profile (comma separated for several).
    default : str
        Value returned while ``message`` is not defined remotely.
    timeout : float
        Timeout in seconds of each HTTP request.
    http : Optional[requests.Session]
        Session used for requests; a new one is created if omitted.
    """

    def __init__(
        self,
        base_url: str,
        application: str = "app",
        profile: str = "default",
        default: str = DEFAULT_MESSAGE,
        timeout: float = 5.0,
        http: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.application = application
        self.profile = profile
        self.default = default
        self.timeout = timeout
        self.http = http or requests.Session()
        self.properties: Dict[str, str] = {}

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.application}/{self.profile}"

    def current_value(self) -> str:
        return self.properties.get(MESSAGE_PROPERTY, self.default)

    def fetch(self) -> Dict[str, str]:
        """Download and flatten the properties of the configured application.

        Raises
        ------
        ConfigurationError
            If the server cannot be reached, answers with an error
            status or returns a document that is not an environment.
        """
        try:
            response = self.http.get(self.url, timeout=self.timeout, headers={"Accept": "application/json"})
            response.raise_for_status()
            environment = ConfigEnvironment.model_validate(response.json())
        except requests.RequestException as exc:
            raise ConfigurationError(f"Config server request failed: {exc}", self.url) from exc
        except ValueError as exc:
            raise ConfigurationError(f"Invalid config server response: {exc}", self.url) from exc
        return environment.flatten()

    def load(self, fail_fast: bool = False) -> None:
        """Perform the initial fetch.

        With ``fail_fast`` a failure is raised; otherwise it is logged
        and the default value is served until a refresh succeeds.
        """
        try:
            self.properties = self.fetch()
        except ConfigurationError as exc:
            if fail_fast:
                raise
            logger.warning("Could not load configuration from %s, using defaults: %s", self.url, exc.message)
            return
        logger.info("Loaded %d properties from %s", len(self.properties), self.url)

    def refresh(self) -> List[str]:
        """Fetch the properties again and swap them in.

        Returns the sorted names of added, removed and modified
        properties.  On failure the previous properties are kept and an
        empty list is returned.
        """
        try:
            fresh = self.fetch()
        except ConfigurationError as exc:
            logger.error("Configuration refresh from %s failed: %s", self.url, exc.message)
            return []
        previous = self.properties
        changed = sorted(key for key in set(previous) | set(fresh) if previous.get(key) != fresh.get(key))
        self.properties = fresh
        if changed:
            logger.info("Configuration refreshed, changed keys: %s", ", ".join(changed))
        return changed


def build_config_source(settings: Settings) -> ConfigSource:
    """Pick the config source described by ``settings`` and load it."""
    if not settings.config_server_url:
        logger.info("No config server configured, serving the local message")
        return StaticConfigSource(settings.default_message)
    source = RemoteConfigSource(
        settings.config_server_url,
        application=settings.config_application_name,
        profile=settings.config_profile,
        default=settings.default_message,
        timeout=settings.config_request_timeout,
    )
    source.load(fail_fast=settings.config_fail_fast)
    return source


async def poll_config(source: ConfigSource, interval: float) -> None:
    """Refresh ``source`` every ``interval`` seconds until cancelled.

    A failing refresh is logged and the next one is attempted on
    schedule; only cancellation ends the loop.
    """
    while True:
        await asyncio.sleep(interval)
        try:
            await run_in_threadpool(source.refresh)
        except Exception:
            logger.exception("Scheduled configuration refresh failed")
