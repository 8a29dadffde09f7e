"""
Analysis over a loaded catalog: consistency checks and the relationship graph.
"""

from nouns.analysis.graph import RelationshipGraph, build_graph
from nouns.analysis.lint import (
    CatalogLinter,
    LintIssue,
    LintReport,
    Severity,
    lint_registry,
)

__all__ = [
    "RelationshipGraph",
    "build_graph",
    "CatalogLinter",
    "LintIssue",
    "LintReport",
    "Severity",
    "lint_registry",
]
