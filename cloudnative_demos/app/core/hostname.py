"""
Host identity resolution.

The counter service annotates every response with the canonical name
of the machine that served it, which makes load balancing across
instances visible.  The name is resolved once when the application is
created; a host that cannot resolve its own name must not start
serving.
"""

import logging
import socket

from .exceptions import HostResolutionError

logger = logging.getLogger(__name__)


def resolve_host_name() -> str:
    """Return the canonical network name of the local host.

    The host name is first resolved to an address, then the address is
    looked up in reverse to obtain the fully qualified name.  When the
    reverse lookup fails the textual address is returned instead.

    Raises
    ------
    HostResolutionError
        If the local host name does not resolve to any address.
    """
    name = socket.gethostname()
    try:
        address = socket.gethostbyname(name)
    except OSError as exc:
        raise HostResolutionError(f"Unable to resolve local host name {name!r}: {exc}") from exc

    try:
        canonical, _, _ = socket.gethostbyaddr(address)
    except OSError:
        logger.debug("Reverse lookup of %s failed, using the address", address)
        return address
    return canonical
