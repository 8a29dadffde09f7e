"""
Noun Models.

A noun is a static description of a business-domain entity type: its
naming, typed properties, relationships to other nouns, and the action
and event labels associated with it. Actions and events are labels only;
nothing in this package performs or emits them.

Example (YAML form):

    Invoice:
      singular: invoice
      plural: invoices
      description: A bill sent to a customer
      properties:
        total: {type: number, description: Total amount due}
      relationships:
        customer: {type: Customer, backref: invoices}
        lines: {type: "InvoiceLineItem[]", backref: invoice}
      actions: [create, finalize, pay, void]
      events: [created, finalized, paid, voided]
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ============================================================================
# Enums
# ============================================================================


class PrimitiveType(str, Enum):
    """Scalar property types understood by the exporters."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    JSON = "json"
    MARKDOWN = "markdown"
    URL = "url"

    @classmethod
    def values(cls) -> set[str]:
        return {member.value for member in cls}


class Cardinality(str, Enum):
    """Cardinality of a relationship, seen from the declaring noun."""
    MANY_TO_ONE = "many-to-one"
    ONE_TO_MANY = "one-to-many"
    MANY_TO_MANY = "many-to-many"


NOUN_NAME_PATTERN = re.compile(r"^[A-Z][A-Za-z0-9]*$")

PROPERTY_KEYS = frozenset({"type", "description", "optional", "array", "default", "examples", "required"})
RELATIONSHIP_KEYS = frozenset({"type", "backref", "description", "required"})
NOUN_KEYS = frozenset({
    "singular", "plural", "description", "properties",
    "relationships", "actions", "events", "metadata",
})


# ============================================================================
# Field Models
# ============================================================================


class NounProperty(BaseModel):
    """A typed field of a noun.

    Attributes:
        type: Primitive type name, or another noun's name
        description: Human-readable description (also used as a generation hint)
        optional: Whether the field may be absent
        array: Whether the field holds a list of values
        default: Default value
        examples: Example values for documentation
    """

    model_config = ConfigDict(extra="forbid")

    type: str = Field(description="Field type")
    description: str | None = Field(default=None, description="Field description")
    optional: bool = Field(default=False, description="Whether the field is optional")
    array: bool = Field(default=False, description="Whether the field is a list")
    default: Any = Field(default=None, description="Default value")
    examples: list[Any] | None = Field(default=None, description="Example values")

    @model_validator(mode="before")
    @classmethod
    def _required_alias(cls, data: Any) -> Any:
        # Some sources spell optionality as `required`.
        if isinstance(data, dict) and "required" in data:
            data = dict(data)
            required = data.pop("required")
            data.setdefault("optional", not required)
        return data

    @field_validator("type")
    @classmethod
    def _type_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("property type must not be blank")
        return value

    @property
    def is_primitive(self) -> bool:
        return self.type in PrimitiveType.values()

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class NounRelationship(BaseModel):
    """An association from one noun to another.

    The `type` names the target noun, suffixed with `[]` for a to-many
    association ("Tag[]").
    """

    model_config = ConfigDict(extra="forbid")

    type: str = Field(description="Target noun, optionally suffixed with []")
    backref: str | None = Field(default=None, description="Field name on the target pointing back")
    description: str | None = Field(default=None, description="Relationship description")
    required: bool = Field(default=False, description="Whether the relationship must be set")

    @field_validator("type")
    @classmethod
    def _type_not_blank(cls, value: str) -> str:
        if not value or not value.strip("[] "):
            raise ValueError("relationship type must name a target")
        return value.strip()

    @property
    def target(self) -> str:
        """Target noun name without the array marker."""
        return self.type[:-2] if self.type.endswith("[]") else self.type

    @property
    def is_many(self) -> bool:
        return self.type.endswith("[]")

    @property
    def cardinality(self) -> Cardinality:
        if self.is_many:
            return Cardinality.MANY_TO_MANY if self.backref else Cardinality.ONE_TO_MANY
        return Cardinality.MANY_TO_ONE

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class Verb(BaseModel):
    """Conjugated forms of an action label.

    Attributes:
        action: Base form (publish)
        actor: Agent noun (publisher)
        act: Third person present (publishes)
        activity: Gerund (publishing)
        result: Result noun (publication)
        reverse: Passive field names, e.g. {"at": "publishedAt", "by": "publishedBy"}
        inverse: Opposite action (unpublish)
    """

    action: str
    actor: str | None = None
    act: str | None = None
    activity: str | None = None
    result: str | None = None
    reverse: dict[str, str] = Field(default_factory=dict)
    inverse: str | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_defaults=True)


# ============================================================================
# Noun Model
# ============================================================================


class Noun(BaseModel):
    """A business-domain entity type.

    Attributes:
        name: Type name (e.g., 'Invoice')
        singular: Singular form used in prose ('invoice')
        plural: Plural form ('invoices')
        description: Human-readable description
        properties: Ordered map of field name to property definition
        relationships: Ordered map of field name to relationship definition
        actions: Action labels (plain strings or Verb definitions)
        events: Event labels
        metadata: Free-form extra data; unknown source keys land here
        category: Key of the category the noun is registered under
    """

    name: str = Field(description="Type name")
    singular: str = Field(description="Singular form")
    plural: str = Field(description="Plural form")
    description: str = Field(default="", description="Noun description")
    properties: dict[str, NounProperty] = Field(default_factory=dict)
    relationships: dict[str, NounRelationship] = Field(default_factory=dict)
    actions: list[Union[str, Verb]] = Field(default_factory=list)
    events: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)
    category: str | None = Field(default=None, exclude=True)

    @field_validator("singular", "plural")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value

    def __str__(self) -> str:
        return f"Noun({self.ref})"

    def __repr__(self) -> str:
        return f"<Noun {self.ref} properties={len(self.properties)} relationships={len(self.relationships)}>"

    @property
    def ref(self) -> str:
        """Qualified reference, 'category.Name' once registered."""
        return f"{self.category}.{self.name}" if self.category else self.name

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any], strict: bool = False) -> "Noun":
        """Create a noun from its plain mapping form.

        Missing singular/plural forms are inferred from the type name.
        Unknown top-level keys are moved into `metadata`, or rejected
        when `strict` is set.

        Raises:
            ValueError: For a non-mapping definition, or unknown keys in strict mode
            pydantic.ValidationError: For malformed field definitions
        """
        from nouns.core.linguistic import infer_noun

        if not isinstance(data or {}, Mapping):
            raise ValueError(f"Noun '{name}' must be defined by a mapping, got {type(data).__name__}")
        data = dict(data or {})
        extras = {k: data.pop(k) for k in list(data) if k not in NOUN_KEYS}
        if extras and strict:
            raise ValueError(f"Noun '{name}' has unknown keys: {', '.join(sorted(extras))}")

        if not data.get("singular") or not data.get("plural"):
            inferred = infer_noun(name)
            data["singular"] = data.get("singular") or inferred.singular
            data["plural"] = data.get("plural") or inferred.plural

        metadata = data.pop("metadata", None) or {}
        if not isinstance(metadata, Mapping):
            raise ValueError(f"Noun '{name}' metadata must be a mapping")
        metadata = dict(metadata)
        metadata.update(extras)

        return cls.model_validate({
            "name": name,
            **data,
            "properties": data.get("properties") or {},
            "relationships": data.get("relationships") or {},
            "actions": data.get("actions") or [],
            "events": data.get("events") or [],
            "metadata": metadata,
        })

    def to_dict(self) -> dict[str, Any]:
        """Convert to the plain mapping form (without the name key)."""
        result: dict[str, Any] = {
            "singular": self.singular,
            "plural": self.plural,
            "description": self.description,
            "properties": {k: p.to_dict() for k, p in self.properties.items()},
            "relationships": {k: r.to_dict() for k, r in self.relationships.items()},
            "actions": [a if isinstance(a, str) else a.to_dict() for a in self.actions],
            "events": list(self.events),
        }
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_property(self, name: str) -> NounProperty | None:
        return self.properties.get(name)

    def get_relationship(self, name: str) -> NounRelationship | None:
        return self.relationships.get(name)

    def required_properties(self) -> dict[str, NounProperty]:
        return {k: p for k, p in self.properties.items() if not p.optional}

    def optional_properties(self) -> dict[str, NounProperty]:
        return {k: p for k, p in self.properties.items() if p.optional}

    def references(self) -> set[str]:
        """Names of all nouns this noun has relationships to."""
        return {r.target for r in self.relationships.values()}

    def action_names(self) -> list[str]:
        return [a if isinstance(a, str) else a.action for a in self.actions]

    def verbs(self) -> list[Verb]:
        """Verb definitions for every action, conjugating plain labels."""
        from nouns.core.linguistic import conjugate

        return [conjugate(a) if isinstance(a, str) else a for a in self.actions]
