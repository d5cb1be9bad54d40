from extbudget.report.debug import NOTHING_FOUND, REPORT_HEADER, debug_rule, render_debug
from extbudget.report.formatter import format_budget

__all__ = ["format_budget", "render_debug", "debug_rule", "REPORT_HEADER", "NOTHING_FOUND"]
