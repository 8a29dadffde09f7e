"""
Catalog Linter.

Static consistency checks over a NounRegistry.

Codes:
    E001  noun name is not a CamelCase identifier
    E002  group lists a noun the category does not define
    W001  property type is neither primitive nor a known noun
    W002  relationship target is not defined anywhere
    W003  backref has no matching relationship on the target
    W004  duplicate action or event label
    I001  action has no matching event
    I002  noun is not listed in any group
    I003  declared plural differs from the inferred plural

Locations are "category.Noun" or "category.Noun.field"; group issues
use "category:group" so a group name never reads as a noun.

Usage:
    report = lint_registry(registry)
    if report.has_errors:
        print(report.to_text())
"""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from nouns.catalog.registry import NounRegistry
from nouns.core.linguistic import event_names_for_action, pluralize
from nouns.core.models import CategoryCatalog, Noun, PrimitiveType
from nouns.core.models.noun import NOUN_NAME_PATTERN
from nouns.utils.logging import get_logger

logger = get_logger("analysis.lint")


class Severity(str, Enum):
    """Issue severity, ordered from most to least severe."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return {"error": 2, "warning": 1, "info": 0}[self.value]


@dataclass
class LintIssue:
    """A single finding."""

    severity: Severity
    code: str
    location: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "location": self.location,
            "message": self.message,
        }

    def __str__(self) -> str:
        return f"{self.severity.value.upper():7} {self.code} {self.location}: {self.message}"


@dataclass
class LintReport:
    """Container for lint findings."""

    issues: list[LintIssue] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.issues)

    def __iter__(self):
        return iter(self.issues)

    def add(self, severity: Severity, code: str, location: str, message: str) -> None:
        self.issues.append(LintIssue(severity, code, location, message))

    @property
    def errors(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def infos(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.INFO]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def codes(self) -> Counter:
        """Count issues per code."""
        return Counter(i.code for i in self.issues)

    def by_code(self, code: str) -> list[LintIssue]:
        return [i for i in self.issues if i.code == code]

    def filter(self, min_severity: Severity | str = Severity.INFO) -> "LintReport":
        """Get a report holding only issues at or above a severity."""
        threshold = Severity(min_severity).rank
        return LintReport([i for i in self.issues if i.severity.rank >= threshold])

    def summary(self) -> str:
        return (
            f"{len(self.errors)} error(s), {len(self.warnings)} warning(s), "
            f"{len(self.infos)} info"
        )

    def to_text(self) -> str:
        lines = [str(issue) for issue in self.issues]
        lines.append(self.summary())
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": {
                "errors": len(self.errors),
                "warnings": len(self.warnings),
                "info": len(self.infos),
            },
            "issues": [issue.to_dict() for issue in self.issues],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def _event_key(event: str) -> str:
    """Comparable form of an event label: "invoice.marked_uncollectible" -> "markeduncollectible"."""
    return event.rsplit(".", 1)[-1].replace("_", "").lower()


class CatalogLinter:
    """Runs every check over a registry.

    Relationship targets resolve against the whole registry, preferring
    a noun from the declaring category when a name is defined in several.
    """

    def __init__(self, registry: NounRegistry):
        self.registry = registry
        self._defined = registry.defined_names()
        self._primitives = PrimitiveType.values()

    def lint(self) -> LintReport:
        report = LintReport()

        for catalog in self.registry.catalogs():
            self._check_groups(catalog, report)
            for noun in catalog:
                location = f"{catalog.key}.{noun.name}"
                self._check_name(noun, location, report)
                self._check_plural(noun, location, report)
                self._check_properties(noun, location, report)
                self._check_relationships(noun, location, report)
                self._check_labels(noun, location, report)

        logger.info(f"Lint finished: {report.summary()}")
        return report

    def _check_groups(self, catalog: CategoryCatalog, report: LintReport) -> None:
        grouped: set[str] = set()
        for group, names in catalog.groups.items():
            for name in names:
                grouped.add(name)
                if name not in catalog:
                    report.add(
                        Severity.ERROR, "E002", f"{catalog.key}:{group}",
                        f"group '{group}' lists undefined noun '{name}'",
                    )

        if not catalog.groups:
            return
        for name in catalog.names():
            if name not in grouped:
                report.add(
                    Severity.INFO, "I002", f"{catalog.key}.{name}",
                    "noun is not listed in any group",
                )

    def _check_name(self, noun: Noun, location: str, report: LintReport) -> None:
        if not NOUN_NAME_PATTERN.match(noun.name):
            report.add(
                Severity.ERROR, "E001", location,
                f"noun name '{noun.name}' is not a CamelCase identifier",
            )

    def _check_plural(self, noun: Noun, location: str, report: LintReport) -> None:
        words = noun.singular.split(" ")
        expected = " ".join(words[:-1] + [pluralize(words[-1])])
        if expected.lower() != noun.plural.lower():
            report.add(
                Severity.INFO, "I003", location,
                f"plural '{noun.plural}' differs from inferred '{expected}'",
            )

    def _check_properties(self, noun: Noun, location: str, report: LintReport) -> None:
        for field_name, prop in noun.properties.items():
            type_name = prop.type.removesuffix("[]")
            if type_name not in self._primitives and type_name not in self._defined:
                report.add(
                    Severity.WARNING, "W001", f"{location}.{field_name}",
                    f"unknown property type '{prop.type}'",
                )

    def _check_relationships(self, noun: Noun, location: str, report: LintReport) -> None:
        for field_name, rel in noun.relationships.items():
            field_location = f"{location}.{field_name}"
            target = self.registry.resolve(rel.target, prefer=noun.category)

            if target is None:
                report.add(
                    Severity.WARNING, "W002", field_location,
                    f"relationship target '{rel.target}' is not defined",
                )
                continue

            if not rel.backref:
                continue

            back = target.get_relationship(rel.backref)
            if back is None:
                report.add(
                    Severity.WARNING, "W003", field_location,
                    f"backref '{rel.backref}' not found on {target.ref}",
                )
            elif back.target != noun.name:
                report.add(
                    Severity.WARNING, "W003", field_location,
                    f"backref {target.ref}.{rel.backref} points to '{back.target}', not '{noun.name}'",
                )

    def _check_labels(self, noun: Noun, location: str, report: LintReport) -> None:
        actions = noun.action_names()

        for kind, labels in (("action", actions), ("event", noun.events)):
            for label, count in Counter(labels).items():
                if count > 1:
                    report.add(
                        Severity.WARNING, "W004", location,
                        f"duplicate {kind} '{label}' ({count}x)",
                    )

        events = {_event_key(e) for e in noun.events}
        for action in dict.fromkeys(actions):
            candidates = event_names_for_action(action)
            if not any(_event_key(c) in events for c in candidates):
                report.add(
                    Severity.INFO, "I001", location,
                    f"action '{action}' has no matching event (expected {' or '.join(candidates)})",
                )


def lint_registry(registry: NounRegistry) -> LintReport:
    """Lint every catalog in a registry."""
    return CatalogLinter(registry).lint()
