"""Tests for RequestOptions and ClientConfig."""

import pytest
from pydantic import ValidationError

from nativehttp.client.config import ClientConfig, RequestOptions
from nativehttp.core.constants import (
    DEFAULT_MAX_HOST_CONNECTIONS,
    DEFAULT_MAX_REDIRECTS,
)


class TestRequestOptions:
    """Tests for RequestOptions validation."""

    def test_defaults(self) -> None:
        """Unset options take client defaults."""
        options = RequestOptions()

        assert options.max_redirects == DEFAULT_MAX_REDIRECTS
        assert options.protocol_version == "1.1"
        assert options.verify_peer is True
        assert options.verify_host is True
        assert options.body == b""
        assert options.on_progress is None

    def test_header_names_lowercased(self) -> None:
        """Header names are normalized, values are not."""
        options = RequestOptions(headers={"X-Token": "AbC", "Accept": "*/*"})

        assert options.headers == {"x-token": "AbC", "accept": "*/*"}

    def test_resolve_hosts_lowercased(self) -> None:
        """DNS override hosts are normalized."""
        options = RequestOptions(resolve={"Example.COM": "127.0.0.1"})

        assert options.resolve == {"example.com": "127.0.0.1"}

    def test_explicit_http_version(self) -> None:
        """http_version overrides the default protocol version."""
        assert RequestOptions(http_version="1.0").protocol_version == "1.0"

    def test_unknown_option_rejected(self) -> None:
        """Typos in option names fail loudly."""
        with pytest.raises(ValidationError):
            RequestOptions(max_redirect=3)  # type: ignore[call-arg]

    def test_timeout_must_be_positive(self) -> None:
        """A zero timeout is invalid."""
        with pytest.raises(ValidationError):
            RequestOptions(timeout=0)

    def test_on_progress_must_be_callable(self) -> None:
        """The progress option only accepts callables."""
        with pytest.raises(ValidationError):
            RequestOptions(on_progress="not callable")


class TestMergedWith:
    """Tests for merging call options over defaults."""

    def test_no_overrides_returns_same_instance(self) -> None:
        """Nothing to merge means the defaults are reused."""
        defaults = RequestOptions(timeout=5)

        assert defaults.merged_with(None) is defaults
        assert defaults.merged_with({}) is defaults

    def test_call_options_override_scalars(self) -> None:
        """Matching keys are replaced."""
        defaults = RequestOptions(timeout=5, max_redirects=3)

        merged = defaults.merged_with({"max_redirects": 0})

        assert merged.max_redirects == 0
        assert merged.timeout == 5

    def test_headers_merge_by_name(self) -> None:
        """Call headers add to and override default headers."""
        defaults = RequestOptions(headers={"Accept": "text/html", "X-App": "1"})

        merged = defaults.merged_with({"headers": {"ACCEPT": "application/json"}})

        assert merged.headers == {"accept": "application/json", "x-app": "1"}

    def test_resolve_merges_by_host(self) -> None:
        """DNS overrides are merged host by host."""
        defaults = RequestOptions(resolve={"a.test": "10.0.0.1"})

        merged = defaults.merged_with({"resolve": {"b.test": "10.0.0.2"}})

        assert merged.resolve == {"a.test": "10.0.0.1", "b.test": "10.0.0.2"}

    def test_merge_validates(self) -> None:
        """Merged options are validated again."""
        with pytest.raises(ValidationError):
            RequestOptions().merged_with({"bogus": True})


class TestClientConfig:
    """Tests for ClientConfig."""

    def test_defaults(self) -> None:
        """A bare config uses the default connection cap."""
        config = ClientConfig()

        assert config.max_host_connections == DEFAULT_MAX_HOST_CONNECTIONS
        assert config.default_options == RequestOptions()

    def test_frozen(self) -> None:
        """Configs cannot be modified."""
        config = ClientConfig()

        with pytest.raises(ValidationError):
            config.max_host_connections = 1  # type: ignore[misc]
