"""Configuration models for the native HTTP client."""

from collections.abc import Callable, Mapping
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nativehttp.core.constants import (
    DEFAULT_HTTP_VERSION,
    DEFAULT_MAX_HOST_CONNECTIONS,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_USER_AGENT,
)


ProgressCallback = Callable[[int, int, dict[str, Any]], None]

# Options whose mappings merge key by key instead of being replaced
_MERGED_MAPPINGS = ("headers", "resolve")


class RequestOptions(BaseModel):
    """Normalized request options.

    Header names are lower-cased. The body may be bytes, a string, a
    mapping (form-encoded), a readable resource, or a callable returning
    chunks until it returns an empty one.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    headers: dict[str, str] = Field(default_factory=dict)
    body: Any = b""
    timeout: Annotated[float, Field(gt=0)] | None = None
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    http_version: str | None = None
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = (
        DEFAULT_USER_AGENT
    )
    proxy: str | None = Field(
        default=None, description="Explicit proxy URL; overrides the environment"
    )
    resolve: dict[str, str] = Field(
        default_factory=dict, description="Host to IP overrides for the DNS cache"
    )
    verify_peer: bool = True
    verify_host: bool = True
    cafile: str | None = None
    capath: str | None = None
    local_cert: str | None = None
    local_pk: str | None = None
    passphrase: str | None = None
    ciphers: str | None = None
    peer_fingerprint: dict[str, str | list[str]] | None = None
    capture_peer_cert_chain: bool = False
    bindto: str | None = None
    on_progress: ProgressCallback | None = None

    @field_validator("headers")
    @classmethod
    def lowercase_header_names(cls, v: dict[str, str]) -> dict[str, str]:
        """Normalize header names to lower case."""
        return {key.lower(): value for key, value in v.items()}

    @field_validator("resolve")
    @classmethod
    def lowercase_resolve_hosts(cls, v: dict[str, str]) -> dict[str, str]:
        """Normalize overridden host names to lower case."""
        return {host.lower(): ip for host, ip in v.items()}

    @property
    def protocol_version(self) -> str:
        """Get the HTTP protocol version to speak."""
        return self.http_version or DEFAULT_HTTP_VERSION

    def merged_with(self, overrides: Mapping[str, Any] | None) -> "RequestOptions":
        """Merge per-call options over these defaults.

        Call options override matching keys; headers and DNS overrides are
        merged name by name.

        Args:
            overrides: Per-call options.

        Returns:
            New validated options.
        """
        if not overrides:
            return self

        values = {name: getattr(self, name) for name in type(self).model_fields}
        for key, value in overrides.items():
            if key in _MERGED_MAPPINGS and value is not None:
                merged = dict(values[key])
                merged.update(
                    {name.lower(): item for name, item in dict(value).items()}
                )
                values[key] = merged
            else:
                values[key] = value
        return type(self).model_validate(values)


class ClientConfig(BaseModel):
    """Configuration of one client instance."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_host_connections: int = Field(
        default=DEFAULT_MAX_HOST_CONNECTIONS,
        description="Concurrent connections per host; 0 or less is unbounded",
    )
    default_options: RequestOptions = Field(default_factory=RequestOptions)
