"""Compile a stylesheet: resolve nesting, apply extends, track budgets."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from extbudget.config import TOTAL, ExtConfig
from extbudget.errors import CompileError, ContextError
from extbudget.model.diagnostic import Diagnostic
from extbudget.report.debug import REPORT_HEADER, debug_rule
from extbudget.stylesheet.emitter import format_rule, format_stylesheet
from extbudget.stylesheet.extender import Extender
from extbudget.stylesheet.model import Extend, Include, Rule, Statement, Stylesheet
from extbudget.stylesheet.parser import parse_stylesheet
from extbudget.tracking.registry import UsageRegistry
from extbudget.tracking.session import ExtSession

logger = logging.getLogger(__name__)

EXT = "ext"
EXT_DEBUG = "ext-debug"
BUDGET_VARIABLE = "ext-budget"
OPTIONS_VARIABLE = "ext-options"

_PLACEHOLDER_RE = re.compile(r"%([A-Za-z_][\w-]*)")


@dataclass
class CompileResult:
    """Output of one compilation unit."""

    css: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    session: ExtSession | None = None

    @property
    def registry(self) -> UsageRegistry | None:
        return self.session.registry if self.session else None


@dataclass
class _Block:
    selectors: list[str]
    declarations: list[tuple[str, str]]


def resolve_selectors(parents: list[str], children: list[str]) -> list[str]:
    """Combine nested selectors with their parents.

    ``&`` is replaced by the parent selector; anything else becomes a
    descendant of it.
    """
    if not parents:
        return list(children)
    resolved: list[str] = []
    for parent in parents:
        for child in children:
            if "&" in child:
                resolved.append(child.replace("&", parent))
            else:
                resolved.append(f"{parent} {child}")
    return resolved


def _merge(base: object, overrides: Mapping[str, object] | None) -> object:
    """Layer API/CLI overrides on top of a stylesheet-defined map."""
    if overrides is None:
        return base
    if base is None:
        return dict(overrides)
    if isinstance(base, Mapping):
        return {**base, **overrides}
    # Leave a malformed stylesheet value in place so it is reported.
    return base


class Compiler:
    """Compiles one parsed stylesheet.

    Statements are processed in source order, so that order decides which
    ``ext`` consumer counts as a duplicate of which. Placeholder blocks are
    rendered last-minute with every selector that extended them.
    """

    def __init__(
        self,
        stylesheet: Stylesheet,
        budgets: Mapping[str, int] | None = None,
        options: Mapping[str, bool] | None = None,
    ) -> None:
        self.stylesheet = stylesheet
        self.extender = Extender(self._declared_placeholders())
        self.session: ExtSession | None = None
        if self._uses_tracking():
            variables = stylesheet.variables
            config = ExtConfig.resolve(
                _merge(variables.get(BUDGET_VARIABLE), budgets),
                _merge(variables.get(OPTIONS_VARIABLE), options),
            )
            self.session = ExtSession(config, extender=self.extender)
        self._blocks: list[_Block] = []
        self._debug_filters: list[str] = []

    def _uses_tracking(self) -> bool:
        return any(
            isinstance(stmt, Include) and stmt.name in (EXT, EXT_DEBUG)
            for stmt in self.stylesheet.walk()
        )

    def _declared_placeholders(self) -> list[str]:
        names: list[str] = []

        def visit(statements: list[Statement], parents: list[str]) -> None:
            for stmt in statements:
                if not isinstance(stmt, Rule):
                    continue
                selectors = resolve_selectors(parents, stmt.selectors)
                for selector in selectors:
                    for name in _PLACEHOLDER_RE.findall(selector):
                        if name not in names:
                            names.append(name)
                visit(stmt.children, selectors)

        visit(self.stylesheet.statements, [])
        return names

    # --- statement processing -------------------------------------------------

    def run(self) -> CompileResult:
        self._process(self.stylesheet.statements, [])

        rendered: list[str] = []
        for block in self._blocks:
            selectors = self._expand_placeholders(block.selectors)
            if selectors and block.declarations:
                rendered.append(format_rule(selectors, block.declarations))
        if self._debug_filters:
            rendered.append(debug_rule(self._debug_report()))

        diagnostics = list(self.session.diagnostics) if self.session else []
        logger.debug(
            "Compiled %d rule(s) with %d diagnostic(s)", len(rendered), len(diagnostics)
        )
        return CompileResult(
            css=format_stylesheet(rendered), diagnostics=diagnostics, session=self.session
        )

    def _debug_report(self) -> str:
        """Merge every requested report into the one overlay the page can show."""
        assert self.session is not None
        reports = {f: self.session.render_debug(f) for f in self._debug_filters}
        if "all" in reports:
            return reports["all"]
        return REPORT_HEADER + "".join(r[len(REPORT_HEADER) :] for r in reports.values())

    def _process(self, statements: list[Statement], parents: list[str]) -> None:
        for stmt in statements:
            if isinstance(stmt, Rule):
                self._process_rule(stmt, parents)
            elif isinstance(stmt, Include):
                self._include(stmt, parents)
            elif isinstance(stmt, Extend):
                if not parents:
                    raise ContextError("cannot extend outside a selector")
                self.extender.extend(stmt.placeholder, parents, stmt.flag)

    def _process_rule(self, rule: Rule, parents: list[str]) -> None:
        selectors = resolve_selectors(parents, rule.selectors)
        # The parent block is emitted before any nested blocks.
        block = _Block(selectors, [(d.name, d.value) for d in rule.declarations])
        self._blocks.append(block)
        self._process(rule.children, selectors)

    def _include(self, include: Include, selectors: list[str]) -> None:
        if include.name == EXT:
            self._ext(include.args, selectors)
        elif include.name == EXT_DEBUG:
            self._debug_filters.append(include.args[0] if include.args else "all")
        else:
            raise CompileError(f"Undefined mixin '{include.name}'.")

    def _ext(self, args: list[str], selectors: list[str]) -> None:
        flags = [a for a in args if a.startswith("!")]
        positional = [a for a in args if not a.startswith("!")]
        if not positional:
            raise CompileError("ext() needs the name of a placeholder to extend.")
        if len(positional) > 2 or len(flags) > 1:
            raise CompileError(f"ext() takes a placeholder, a budget and a flag, got {args}.")
        placeholder = positional[0]
        budget_name = positional[1] if len(positional) > 1 else TOTAL
        assert self.session is not None
        self.session.ext(
            placeholder,
            budget_name,
            flags[0] if flags else "",
            selectors=selectors,
        )

    def _expand_placeholders(
        self, selectors: list[str], active: frozenset[str] = frozenset()
    ) -> list[str]:
        """Replace placeholder selectors with their consumers; drop unused ones.

        *active* holds the placeholders being expanded further up, so a
        placeholder that extends itself expands to nothing.
        """
        expanded: list[str] = []
        for selector in selectors:
            match = _PLACEHOLDER_RE.search(selector)
            if match is None:
                candidates = [selector]
            elif match.group(1) in active:
                candidates = []
            else:
                token = match.group(0)
                candidates = [
                    selector.replace(token, consumer, 1)
                    for consumer in self.extender.consumers(match.group(1))
                ]
                # Nested placeholders in the same selector expand in turn.
                candidates = self._expand_placeholders(candidates, active | {match.group(1)})
            for candidate in candidates:
                if candidate not in expanded:
                    expanded.append(candidate)
        return expanded


def compile_string(
    source: str,
    budgets: Mapping[str, int] | None = None,
    options: Mapping[str, bool] | None = None,
) -> CompileResult:
    """Parse and compile stylesheet *source*.

    *budgets* and *options* override the ``$ext-budget`` and ``$ext-options``
    maps defined in the stylesheet itself, key by key.
    """
    stylesheet = parse_stylesheet(source)
    return Compiler(stylesheet, budgets=budgets, options=options).run()


def compile_file(
    path: str | Path,
    budgets: Mapping[str, int] | None = None,
    options: Mapping[str, bool] | None = None,
) -> CompileResult:
    """Compile the stylesheet stored at *path* (UTF-8)."""
    source = Path(path).read_text(encoding="utf-8")
    return compile_string(source, budgets=budgets, options=options)
