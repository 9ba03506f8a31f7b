"""Environment settings powered by Pydantic BaseSettings."""

import re

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


_NO_PROXY_SPLIT = re.compile(r"[\s,]+")


class ProxyEnvironment(BaseSettings):
    """Proxy-related process environment, read the way curl does.

    Variable names are case-sensitive: the lower-case and upper-case
    spellings carry different trust levels.
    """

    model_config = SettingsConfigDict(case_sensitive=True, frozen=True)

    http_proxy: str | None = Field(default=None, validation_alias="http_proxy")
    http_proxy_upper: str | None = Field(default=None, validation_alias="HTTP_PROXY")
    https_proxy: str | None = Field(default=None, validation_alias="https_proxy")
    https_proxy_upper: str | None = Field(
        default=None, validation_alias="HTTPS_PROXY"
    )
    all_proxy: str | None = Field(default=None, validation_alias="all_proxy")
    all_proxy_upper: str | None = Field(default=None, validation_alias="ALL_PROXY")
    no_proxy: str | None = Field(default=None, validation_alias="no_proxy")
    no_proxy_upper: str | None = Field(default=None, validation_alias="NO_PROXY")
    request_method: str | None = Field(
        default=None, validation_alias="REQUEST_METHOD"
    )

    @property
    def is_cli(self) -> bool:
        """Whether the process runs as a command-line program.

        Under CGI, request headers become ``HTTP_*`` variables, so an
        inbound ``Proxy:`` header would masquerade as ``HTTP_PROXY``.
        """
        return not self.request_method

    def no_proxy_rules(self) -> list[str]:
        """Return the no_proxy bypass rules.

        Returns:
            Host patterns split on whitespace and commas.
        """
        raw = self.no_proxy or self.no_proxy_upper or ""
        return [rule for rule in _NO_PROXY_SPLIT.split(raw) if rule]


def get_proxy_environment() -> ProxyEnvironment:
    """Get a snapshot of the proxy environment."""
    return ProxyEnvironment()
