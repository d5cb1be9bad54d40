from extbudget.stylesheet.parser import parse_stylesheet
from extbudget.stylesheet.model import (
    Declaration,
    Extend,
    Include,
    Rule,
    Stylesheet,
    Variable,
)

__all__ = [
    "parse_stylesheet",
    "Stylesheet",
    "Rule",
    "Declaration",
    "Include",
    "Extend",
    "Variable",
]
