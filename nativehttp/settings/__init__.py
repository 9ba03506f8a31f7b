"""Environment settings loading."""

from .app import ProxyEnvironment, get_proxy_environment


__all__ = ["ProxyEnvironment", "get_proxy_environment"]
