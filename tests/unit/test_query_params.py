"""Tests for /probe request parameter parsing helpers."""

import pytest

from commonstatus_exporter.adapters.frameworks.query_params import (
    BadProbeRequest,
    _parse_target_param,
    _parse_timeout_header,
)


class TestParseTargetParam:
    """Tests for _parse_target_param()."""

    def test_returns_target(self) -> None:
        """A single target parameter is returned as-is."""
        assert _parse_target_param([("target", "http://app:8080/status")]) == (
            "http://app:8080/status"
        )

    def test_rejects_extra_parameters(self) -> None:
        """Any parameter besides target is a bad request."""
        with pytest.raises(BadProbeRequest, match="only one parameter"):
            _parse_target_param([("target", "http://a"), ("bla", "foo")])

    def test_repeated_target_uses_first_value(self) -> None:
        """A repeated target is one parameter; its first value wins."""
        assert _parse_target_param([("target", "http://a"), ("target", "http://b")]) == (
            "http://a"
        )

    def test_rejects_extra_parameter_after_repeated_target(self) -> None:
        """Distinct names are counted, not pairs."""
        with pytest.raises(BadProbeRequest, match="only one parameter"):
            _parse_target_param(
                [("target", "http://a"), ("target", "http://b"), ("bla", "foo")]
            )

    @pytest.mark.parametrize("params", [[], [("bla", "foo")], [("target", "")]])
    def test_rejects_missing_target(self, params: list[tuple[str, str]]) -> None:
        """A missing or empty target is a bad request."""
        with pytest.raises(BadProbeRequest, match="'target' is missing"):
            _parse_target_param(params)


class TestParseTimeoutHeader:
    """Tests for _parse_timeout_header()."""

    def test_missing_header_uses_default(self) -> None:
        """Without the header the configured timeout is used."""
        assert _parse_timeout_header(None, 8.0) == 8.0

    def test_header_overrides_default(self) -> None:
        """A valid header value wins."""
        assert _parse_timeout_header("3", 1.0) == 3.0
        assert _parse_timeout_header("2.5", 1.0) == 2.5

    @pytest.mark.parametrize("value", ["", "abc", "0", "-1", "nan", "inf"])
    def test_invalid_header_uses_default(self, value: str) -> None:
        """Unusable header values fall back to the default."""
        assert _parse_timeout_header(value, 8.0) == 8.0
