"""
Relationship Graph.

NetworkX representation of the nouns in a registry and the relationships
declared between them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import networkx as nx

from nouns.catalog.registry import NounRegistry
from nouns.core.models import Noun
from nouns.utils.logging import get_logger

logger = get_logger("analysis.graph")


@dataclass
class EdgeData:
    """Data associated with a relationship edge."""

    field: str
    cardinality: str
    backref: str | None = None
    required: bool = False
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "cardinality": self.cardinality,
            "backref": self.backref,
            "required": self.required,
            "description": self.description,
        }


class RelationshipGraph:
    """Directed multigraph of nouns and their relationships.

    Nodes are keyed by "category.Name". Relationship targets that are not
    defined anywhere get a placeholder node keyed by the bare name with
    defined=False.

    Usage:
        graph = RelationshipGraph(registry)
        graph.build()

        graph.neighbors("finance.Invoice")
        graph.dangling_targets()
    """

    def __init__(self, registry: NounRegistry):
        """Initialize the graph.

        Args:
            registry: Registry to build from
        """
        self.registry = registry
        self._graph: nx.MultiDiGraph = nx.MultiDiGraph()

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the NetworkX graph."""
        return self._graph

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def build(self) -> "RelationshipGraph":
        """Build the graph from the registry."""
        self._graph.clear()

        for _, noun in self.registry.iterate():
            self.add_noun(noun)

        for _, noun in self.registry.iterate():
            for field_name in noun.relationships:
                self.add_relationship(noun, field_name)

        logger.info(f"Built graph: {self.node_count} nodes, {self.edge_count} edges")
        return self

    def add_noun(self, noun: Noun) -> None:
        self._graph.add_node(
            noun.ref,
            name=noun.name,
            category=noun.category,
            description=noun.description,
            defined=True,
        )

    def add_relationship(self, noun: Noun, field_name: str) -> None:
        rel = noun.relationships[field_name]
        target = self.registry.resolve(rel.target, prefer=noun.category)

        if target is None:
            target_key = rel.target
            if target_key not in self._graph:
                self._graph.add_node(target_key, name=rel.target, category=None, description="", defined=False)
        else:
            target_key = target.ref

        edge = EdgeData(
            field=field_name,
            cardinality=rel.cardinality.value,
            backref=rel.backref,
            required=rel.required,
            description=rel.description,
        )
        self._graph.add_edge(noun.ref, target_key, key=field_name, **edge.to_dict())

    # ========== Queries ==========

    def _node(self, ref: str) -> str:
        if ref in self._graph:
            return ref
        return self.registry.get(ref).ref

    def neighbors(self, ref: str) -> list[tuple[str, str, dict]]:
        """Outgoing relationships of a noun as (field, target, edge data)."""
        node = self._node(ref)
        return [
            (key, target, dict(data))
            for _, target, key, data in self._graph.out_edges(node, keys=True, data=True)
        ]

    def incoming(self, ref: str) -> list[tuple[str, str, dict]]:
        """Relationships pointing at a noun as (source, field, edge data)."""
        node = self._node(ref)
        return [
            (source, key, dict(data))
            for source, _, key, data in self._graph.in_edges(node, keys=True, data=True)
        ]

    def dangling_targets(self) -> dict[str, list[str]]:
        """Undefined target names mapped to the nouns referencing them."""
        result: dict[str, list[str]] = {}
        for node, data in self._graph.nodes(data=True):
            if not data.get("defined"):
                result[node] = sorted({src for src, _ in self._graph.in_edges(node)})
        return dict(sorted(result.items()))

    def backref_pairs(self) -> list[tuple[str, str, str, str]]:
        """Relationships whose backref is declared on the target.

        Returns:
            (source, field, target, backref) tuples, each pair reported once
        """
        pairs = []
        seen: set[frozenset] = set()
        for source, target, key, data in self._graph.edges(keys=True, data=True):
            backref = data.get("backref")
            if not backref or not self._graph.has_edge(target, source, key=backref):
                continue
            marker = frozenset({(source, key), (target, backref)})
            if marker in seen:
                continue
            seen.add(marker)
            pairs.append((source, key, target, backref))
        return pairs

    def connected_groups(self) -> list[set[str]]:
        """Weakly connected components, largest first."""
        components = [set(c) for c in nx.weakly_connected_components(self._graph)]
        return sorted(components, key=lambda c: (-len(c), min(c)))

    def stats(self) -> dict[str, int]:
        dangling = sum(1 for _, d in self._graph.nodes(data=True) if not d.get("defined"))
        return {
            "nodes": self.node_count,
            "edges": self.edge_count,
            "dangling": dangling,
            "components": nx.number_weakly_connected_components(self._graph) if self.node_count else 0,
        }

    # ========== Export ==========

    def to_dict(self) -> dict:
        """Export graph to dictionary format."""
        return {
            "nodes": [
                {"id": n, **data}
                for n, data in self._graph.nodes(data=True)
            ],
            "edges": [
                {"source": u, "target": v, **data}
                for u, v, data in self._graph.edges(data=True)
            ],
        }


def build_graph(registry: NounRegistry) -> RelationshipGraph:
    """Build a relationship graph for a registry."""
    return RelationshipGraph(registry).build()
