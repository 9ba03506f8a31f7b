"""Data models shared by the client, network and redirect layers."""

from dataclasses import asdict, dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# Internal bookkeeping hidden from caller-facing snapshots
_PRIVATE_INFO_FIELDS = ("fopen_time",)
# Progress callbacks report transfer counters only
_PROGRESS_HIDDEN_FIELDS = ("fopen_time", "size_body")


class ProxyDescriptor(BaseModel):
    """Resolved proxy endpoint for one request.

    The URL uses the transport form: ``tcp://host:port`` for plain HTTP
    proxies and ``ssl://host:port`` for proxies reached over TLS.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str = Field(min_length=1, description="Transport URL of the proxy")
    auth: str | None = Field(
        default=None, description="Proxy-Authorization header value"
    )


@dataclass
class TrackedRequestInfo:
    """Live telemetry of one logical request across all of its hops.

    Mutated by the DNS resolver, the notification sink and the redirect
    resolver while the exchange runs. Read-only once it terminates.

    Attributes:
        url: Current absolute URL (changes on every followed redirect).
        http_method: Method of the current hop.
        http_code: Status of the last response received.
        redirect_count: Number of redirects followed so far.
        redirect_url: Next URL computed from the last Location header.
        primary_ip: Address the current hop connects to.
        primary_port: Port the current hop connects to.
    """

    url: str
    http_method: str
    response_headers: list[str] = field(default_factory=list)
    error: str | None = None
    http_code: int = 0
    redirect_count: int = 0
    redirect_url: str | None = None
    start_time: float = 0.0
    fopen_time: float = 0.0
    connect_time: float = 0.0
    redirect_time: float = 0.0
    starttransfer_time: float = 0.0
    total_time: float = 0.0
    namelookup_time: float = 0.0
    size_upload: int = 0
    size_download: int = 0
    size_body: int = 0
    primary_ip: str = ""
    primary_port: int = 0

    def snapshot(self, for_progress: bool = False) -> dict[str, Any]:
        """Return a caller-facing copy of the telemetry.

        Args:
            for_progress: Also hide the request body size, as passed to
                progress callbacks.

        Returns:
            Dictionary of info fields without internal bookkeeping.
        """
        data = asdict(self)
        hidden = _PROGRESS_HIDDEN_FIELDS if for_progress else _PRIVATE_INFO_FIELDS
        for key in hidden:
            data.pop(key, None)
        return data
