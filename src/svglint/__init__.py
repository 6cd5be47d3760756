"""SVG tree linting."""

from .engine import validate_document, validate_element
from .report import FileFailure, LintReport, Violation
from .rules import DEFAULT_RULES, NamespacedAttribute, RuleSet, load_rules
from .walker import lint_tree, walk

__all__ = [
    "DEFAULT_RULES",
    "FileFailure",
    "LintReport",
    "NamespacedAttribute",
    "RuleSet",
    "Violation",
    "lint_tree",
    "load_rules",
    "validate_document",
    "validate_element",
    "walk",
]
