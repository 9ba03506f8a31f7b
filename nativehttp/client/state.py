"""Client-wide state shared by every request a client issues."""

import random
import sys
from dataclasses import dataclass, field
from typing import Any

from nativehttp.core.constants import DEFAULT_MAX_HOST_CONNECTIONS
from nativehttp.network.dns import DnsCache, DnsResolver, HostLookup, system_lookup


@dataclass
class ClientState:
    """State owned by one client and shared by reference with its requests.

    The DNS cache and connection bookkeeping live here rather than in any
    process-global structure. Connection counters and pending responses are
    maintained by the stream multiplexer; enforcing the per-host limit is
    its job too.

    Attributes:
        max_host_connections: Per-host connection cap (``sys.maxsize`` when
            configured as 0 or less).
        dns_cache: Host to IP cache, never invalidated.
        open_handles: Open connections, keyed by response id.
        handles_activity: Pending activity per response id.
        pending_responses: Responses waiting for a free connection slot.
        response_count: Number of responses created by the client.
        id: Random identifier of this state, for logging.
    """

    max_host_connections: int = DEFAULT_MAX_HOST_CONNECTIONS
    dns_cache: DnsCache = field(default_factory=DnsCache)
    lookup: HostLookup = field(default=system_lookup, repr=False)
    open_handles: dict[int, Any] = field(default_factory=dict)
    handles_activity: dict[int, list[Any]] = field(default_factory=dict)
    pending_responses: dict[int, Any] = field(default_factory=dict)
    response_count: int = 0
    id: int = field(default_factory=lambda: random.getrandbits(63))

    def __post_init__(self) -> None:
        if self.max_host_connections <= 0:
            self.max_host_connections = sys.maxsize

    def dns_resolver(self) -> DnsResolver:
        """Create a resolver bound to this state's cache."""
        return DnsResolver(self.dns_cache, self.lookup)

    def next_response_id(self) -> int:
        """Allocate the identifier of a new response."""
        self.response_count += 1
        return self.response_count
