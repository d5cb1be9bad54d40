"""Tests for ExtSession.ext: consumer tracking, mirroring and budget checks."""

import pytest

from extbudget.config import ExtConfig
from extbudget.errors import (
    BudgetExceededError,
    ContextError,
    DuplicateSelectorError,
    UndefinedPlaceholderError,
)
from extbudget.model.diagnostic import DiagnosticKind
from extbudget.stylesheet.extender import Extender
from extbudget.tracking.session import ExtSession


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _session(budgets=None, **options) -> ExtSession:
    config = ExtConfig.resolve(budgets or {"total": 15, "heading": 12}, options or None)
    return ExtSession(config)


def _kinds(session: ExtSession) -> list[DiagnosticKind]:
    return [d.kind for d in session.diagnostics]


class _RecordingExtender:
    def __init__(self):
        self.calls = []

    def extend(self, placeholder, selectors, flag=""):
        self.calls.append((placeholder, list(selectors), flag))


# ---------------------------------------------------------------------------
# Recording consumers
# ---------------------------------------------------------------------------


class TestRecording:
    def test_registry_initialized_from_budgets(self):
        session = _session()
        assert session.registry.budget_names() == ["total", "heading"]

    def test_default_budget_is_total(self):
        session = _session()
        session.ext("card", selectors=[".a"])
        assert session.registry.consumers("total", "card") == (".a",)

    def test_duplicate_example(self):
        session = _session()
        for selector in (".a", ".b", ".a"):
            session.ext("card", "total", selectors=[selector])
        assert session.registry.consumers("total", "card") == (".a", ".b")
        assert _kinds(session) == [DiagnosticKind.DUPLICATE]
        assert session.diagnostics[0].selector == ".a"

    def test_selector_group_counts_each_selector(self):
        session = _session()
        recorded = session.ext("card", selectors=[".a", ".b"])
        assert recorded == [".a", ".b"]

    def test_k_distinct_calls_record_k(self):
        session = _session()
        for i in range(7):
            session.ext("card", selectors=[f".c{i}"])
        assert len(session.registry.consumers("total", "card")) == 7
        assert session.diagnostics == []

    def test_empty_selector_strings_ignored(self):
        session = _session()
        session.ext("card", selectors=["", ".a"])
        assert session.registry.consumers("total", "card") == (".a",)


class TestContext:
    def test_no_selectors_raises(self):
        session = _session()
        with pytest.raises(ContextError, match="cannot extend outside a selector"):
            session.ext("card")

    @pytest.mark.parametrize(
        "options",
        [{}, {"strict": True}, {"warn-over": False, "warn-duplicates": False}],
    )
    def test_raises_regardless_of_options(self, options):
        session = _session(**options)
        with pytest.raises(ContextError):
            session.ext("card", selectors=[])


class TestInheritancePrimitive:
    def test_flag_passed_verbatim(self):
        extender = _RecordingExtender()
        session = ExtSession(ExtConfig.resolve({"total": 5}), extender=extender)
        session.ext("card", "total", "!optional", selectors=[".a"])
        assert extender.calls == [("card", [".a"], "!optional")]

    def test_undefined_placeholder_propagates(self):
        session = ExtSession(ExtConfig.resolve({"total": 5}), extender=Extender(["card"]))
        with pytest.raises(UndefinedPlaceholderError):
            session.ext("missing", selectors=[".a"])

    def test_optional_undefined_still_recorded(self):
        session = ExtSession(ExtConfig.resolve({"total": 5}), extender=Extender())
        session.ext("missing", flag="!optional", selectors=[".a"])
        assert session.registry.consumers("total", "missing") == (".a",)


# ---------------------------------------------------------------------------
# Unknown budgets
# ---------------------------------------------------------------------------


class TestUnknownBudget:
    def test_warns_and_proceeds(self):
        session = _session()
        recorded = session.ext("card", "footer", selectors=[".a"])
        assert recorded == [".a"]
        assert _kinds(session) == [DiagnosticKind.CONFIGURATION]
        assert session.diagnostics[0].budget == "footer"
        assert "footer" not in session.registry

    def test_transient_map_not_persisted(self):
        session = _session()
        session.ext("card", "footer", selectors=[".a"])
        recorded = session.ext("card", "footer", selectors=[".a"])
        # No duplicate: the first call's consumers were not kept.
        assert recorded == [".a"]
        assert DiagnosticKind.DUPLICATE not in _kinds(session)

    def test_still_mirrored_into_total(self):
        session = _session()
        session.ext("card", "footer", selectors=[".a"])
        assert session.registry.consumers("total", "card") == (".a",)


# ---------------------------------------------------------------------------
# Mirroring into total
# ---------------------------------------------------------------------------


class TestTotalMirroring:
    def test_named_budget_mirrors(self):
        session = _session()
        session.ext("h", "heading", selectors=[".a"])
        session.ext("h", "heading", selectors=[".b"])
        assert session.registry.consumers("total", "h") == (".a", ".b")
        assert session.registry.consumers("heading", "h") == (".a", ".b")

    def test_last_write_wins_across_budgets(self):
        session = _session({"total": 15, "heading": 12, "button": 4})
        session.ext("h", "heading", selectors=[".a", ".b"])
        session.ext("h", "button", selectors=[".x"])
        assert session.registry.consumers("heading", "h") == (".a", ".b")
        assert session.registry.consumers("total", "h") == (".x",)

    def test_no_total_budget_no_mirror(self):
        session = _session({"heading": 12})
        session.ext("h", "heading", selectors=[".a"])
        assert session.registry.budget_names() == ["heading"]


# ---------------------------------------------------------------------------
# Budget checks
# ---------------------------------------------------------------------------


class TestOverBudget:
    def test_thirteenth_call_reports_one(self):
        session = _session()
        for i in range(12):
            session.ext("h", "heading", selectors=[f".h{i}"])
        assert session.diagnostics == []
        session.ext("h", "heading", selectors=[".h12"])
        [diag] = session.diagnostics
        assert diag.kind is DiagnosticKind.OVER_BUDGET
        assert diag.overage == 1
        assert diag.limit == 12
        assert diag.selector == ".h12"
        assert diag.budget == "heading"

    def test_reported_on_every_call_above(self):
        session = _session({"total": 2})
        for i in range(5):
            session.ext("card", selectors=[f".c{i}"])
        overages = [d.overage for d in session.diagnostics]
        assert overages == [1, 2, 3]

    def test_strict_raises(self):
        session = _session({"total": 1}, strict=True)
        session.ext("card", selectors=[".a"])
        with pytest.raises(BudgetExceededError) as info:
            session.ext("card", selectors=[".b"])
        diag = info.value.diagnostic
        assert diag.placeholder == "card"
        assert diag.selector == ".b"
        assert diag.overage == 1
        assert diag.limit == 1

    def test_strict_duplicate_raises(self):
        session = _session(strict=True)
        session.ext("card", selectors=[".a"])
        with pytest.raises(DuplicateSelectorError):
            session.ext("card", selectors=[".a"])

    def test_silent_when_warn_over_off(self):
        session = _session({"total": 1}, **{"warn-over": False})
        session.ext("card", selectors=[".a"])
        session.ext("card", selectors=[".b"])
        assert session.diagnostics == []
        assert len(session.registry.consumers("total", "card")) == 2

    def test_mirror_does_not_check_total_limit(self):
        session = _session({"total": 1, "heading": 5})
        session.ext("h", "heading", selectors=[".a", ".b"])
        assert session.diagnostics == []

    def test_warnings_property(self):
        session = _session({"total": 1})
        session.ext("card", selectors=[".a", ".b"])
        assert len(session.warnings) == 1


class TestRenderDebug:
    def test_delegates_to_report(self):
        session = _session()
        report = session.render_debug()
        assert report.startswith("EXTEND BUDGET REPORT")
        assert "Nothing to see here" in report
