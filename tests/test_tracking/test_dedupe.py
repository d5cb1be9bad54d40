"""Tests for the duplicate selector filter."""

import pytest

from extbudget.config import ExtOptions
from extbudget.errors import DuplicateSelectorError
from extbudget.model.diagnostic import DiagnosticKind, Severity
from extbudget.tracking.dedupe import dedupe, join_selectors


class TestDedupe:
    def test_no_duplicates_unchanged(self):
        emitted = []
        result = dedupe([".a", ".b", ".c"], "card", ExtOptions(), emitted.append)
        assert result == [".a", ".b", ".c"]
        assert emitted == []

    def test_first_occurrence_order_kept(self):
        emitted = []
        result = dedupe([".b", ".a", ".b", ".c", ".a"], "card", ExtOptions(), emitted.append)
        assert result == [".b", ".a", ".c"]
        assert len(emitted) == 2

    @pytest.mark.parametrize("n", [1, 2, 5])
    def test_one_warning_per_repeat(self, n):
        emitted = []
        result = dedupe([".a"] * (n + 1), "card", ExtOptions(), emitted.append)
        assert result == [".a"]
        assert len(emitted) == n

    def test_warning_fields(self):
        emitted = []
        dedupe([".a", ".a"], "card", ExtOptions(), emitted.append)
        diag = emitted[0]
        assert diag.kind is DiagnosticKind.DUPLICATE
        assert diag.severity is Severity.WARNING
        assert diag.placeholder == "card"
        assert diag.selector == ".a"

    def test_strict_raises_on_first(self):
        emitted = []
        opts = ExtOptions(strict=True)
        with pytest.raises(DuplicateSelectorError) as info:
            dedupe([".a", ".b", ".b", ".a"], "card", opts, emitted.append)
        assert info.value.diagnostic.selector == ".b"
        assert info.value.diagnostic.severity is Severity.ERROR
        assert emitted == []

    def test_silent_when_warnings_off(self):
        emitted = []
        opts = ExtOptions(warn_duplicates=False)
        assert dedupe([".a", ".a"], "card", opts, emitted.append) == [".a"]
        assert emitted == []

    def test_logs_without_emit(self, caplog):
        with caplog.at_level("WARNING", logger="extbudget.tracking.dedupe"):
            dedupe([".a", ".a"], "card", ExtOptions())
        assert "already extending %card" in caplog.text


class TestJoinSelectors:
    def test_join(self):
        assert join_selectors([".a", ".b > p"]) == ".a, .b > p"

    def test_empty(self):
        assert join_selectors([]) == ""
