"""Tests for metric helper functions."""

import pytest

from commonstatus_exporter.core.metrics import counter, gauge, sanitize_name, untyped
from commonstatus_exporter.core.models import MetricKind, MetricRecord


class TestSanitizeName:
    """Tests for sanitize_name()."""

    @pytest.mark.core
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("GC-PS-MarkSweep", "GC_PS_MarkSweep"),
            ("http_requests_total", "http_requests_total"),
            ("job:rate5m", "job:rate5m"),
            ("Memory.Used (MB)", "Memory_Used__MB_"),
            ("5xx", "_5xx"),
            ("", "_"),
        ],
    )
    def test_sanitizes(self, raw: str, expected: str) -> None:
        """Invalid characters are replaced with underscores."""
        assert sanitize_name(raw) == expected


class TestCounter:
    """Tests for counter() helper function."""

    @pytest.mark.core
    def test_counter_creates_metric_record(self) -> None:
        """Counter creates a MetricRecord of kind COUNTER."""
        record = counter("probe_success_total", 3)
        assert isinstance(record, MetricRecord)
        assert record.kind is MetricKind.COUNTER
        assert record.value == 3.0

    @pytest.mark.core
    def test_counter_accepts_help_and_labels(self) -> None:
        """Counter accepts help text and labels."""
        record = counter("a_total", 1, help="Some help", labels={"job": "x"})
        assert record.help == "Some help"
        assert record.labels == {"job": "x"}

    @pytest.mark.core
    def test_counter_defaults_to_empty_labels(self) -> None:
        """Counter defaults to empty labels dict."""
        assert counter("a_total", 1).labels == {}


class TestGauge:
    """Tests for gauge() helper function."""

    @pytest.mark.core
    def test_gauge_creates_metric_record(self) -> None:
        """Gauge creates a MetricRecord with name and value."""
        record = gauge("load_average1", 1.94)
        assert record.name == "load_average1"
        assert record.value == 1.94
        assert record.kind is MetricKind.GAUGE

    @pytest.mark.core
    def test_gauge_sanitizes_name(self) -> None:
        """Gauge names are sanitized."""
        assert gauge("GC-PS", 1).name == "GC_PS"


class TestUntyped:
    """Tests for untyped() helper function."""

    @pytest.mark.core
    def test_untyped_has_no_help(self) -> None:
        """Plain status values carry no help text."""
        record = untyped("ThreadCount", 55)
        assert record.kind is MetricKind.UNTYPED
        assert record.help == ""


class TestPackageExports:
    """Tests for package-level exports."""

    @pytest.mark.core
    def test_helpers_importable_from_package(self) -> None:
        """Helper functions are importable from the package."""
        from commonstatus_exporter import convert, counter, gauge, normalize_number

        assert callable(counter)
        assert callable(gauge)
        assert callable(convert)
        assert callable(normalize_number)
