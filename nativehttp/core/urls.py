"""Validation of request and redirect target URLs."""

from urllib.parse import SplitResult, urlsplit

from nativehttp.core.errors import ConfigurationError


SUPPORTED_SCHEMES = ("http", "https")


def split_http_url(url: str, option: str = "url") -> SplitResult:
    """Split an absolute http(s) URL, rejecting anything unusable.

    Args:
        url: Absolute URL of a hop.
        option: Name reported in the error (``url`` or ``location``).

    Returns:
        The split URL; its ``port`` is known to be valid.

    Raises:
        ConfigurationError: If the URL is malformed, the scheme is not
            http(s), the host is missing or the port is invalid.
    """
    try:
        parts = urlsplit(url)
        parts.port  # noqa: B018
    except ValueError as e:
        msg = f'Invalid URL "{url}": {e}.'
        raise ConfigurationError(msg, option=option) from e

    scheme = parts.scheme.lower()
    if scheme not in SUPPORTED_SCHEMES:
        msg = f'Unsupported URL scheme "{scheme}": "http" or "https" expected.'
        raise ConfigurationError(msg, option=option)

    if not parts.hostname:
        msg = f'Invalid URL "{url}": host is missing.'
        raise ConfigurationError(msg, option=option)

    return parts
