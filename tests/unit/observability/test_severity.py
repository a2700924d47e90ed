"""Unit tests for the Severity scale."""

from __future__ import annotations

import pytest

from guard4j.config import ConfigError
from guard4j.observability.severity import Severity


class TestOrdering:
    def test_total_order_least_to_most_severe(self) -> None:
        assert list(Severity) == [
            Severity.TRACE,
            Severity.DEBUG,
            Severity.INFO,
            Severity.WARN,
            Severity.ERROR,
            Severity.FATAL,
        ]
        assert sorted(reversed(list(Severity))) == list(Severity)

    def test_is_at_least_includes_self(self) -> None:
        assert Severity.WARN.is_at_least(Severity.WARN)
        assert Severity.ERROR.is_at_least(Severity.WARN)
        assert not Severity.INFO.is_at_least(Severity.WARN)

    def test_is_more_severe_than_is_strict(self) -> None:
        assert Severity.FATAL.is_more_severe_than(Severity.ERROR)
        assert not Severity.ERROR.is_more_severe_than(Severity.ERROR)

    def test_comparison_operators(self) -> None:
        assert Severity.DEBUG < Severity.INFO <= Severity.INFO
        assert Severity.FATAL > Severity.TRACE


class TestClassification:
    @pytest.mark.parametrize("severity", [Severity.ERROR, Severity.FATAL])
    def test_is_error(self, severity: Severity) -> None:
        assert severity.is_error()

    @pytest.mark.parametrize("severity", [Severity.TRACE, Severity.DEBUG, Severity.INFO, Severity.WARN])
    def test_not_error(self, severity: Severity) -> None:
        assert not severity.is_error()

    def test_alerting_starts_at_warn(self) -> None:
        assert [s for s in Severity if s.is_alerting()] == [Severity.WARN, Severity.ERROR, Severity.FATAL]

    def test_production_levels(self) -> None:
        assert [s for s in Severity if s.is_production_level()] == [
            Severity.INFO,
            Severity.WARN,
            Severity.ERROR,
            Severity.FATAL,
        ]

    def test_tag_is_lowercase_name(self) -> None:
        assert Severity.WARN.tag == "warn"

    def test_log_methods(self) -> None:
        assert Severity.TRACE.log_method == "debug"
        assert Severity.WARN.log_method == "warning"
        assert Severity.FATAL.log_method == "critical"


class TestParse:
    def test_case_insensitive(self) -> None:
        assert Severity.parse("error") is Severity.ERROR

    def test_aliases(self) -> None:
        assert Severity.parse("WARNING") is Severity.WARN
        assert Severity.parse("critical") is Severity.FATAL

    def test_unknown_raises_config_error(self) -> None:
        with pytest.raises(ConfigError):
            Severity.parse("loud")
