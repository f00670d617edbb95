"""Data models for relationship graph notation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Direction(Enum):
	"""Direction of a graph edge."""

	OUTBOUND = "outbound"  # node → targets (uses, calls, db, events, external, config)
	INBOUND = "inbound"  # callers → node ([by]←)


@dataclass(frozen=True)
class GraphEdge:
	"""A single edge in a relationship graph: relation type, direction and targets."""

	relation_type: str
	direction: Direction
	targets: tuple[str, ...] = ()

	@property
	def is_outbound(self) -> bool:
		"""Whether the edge points away from its node."""
		return self.direction is Direction.OUTBOUND

	@property
	def is_inbound(self) -> bool:
		"""Whether the edge points at its node."""
		return self.direction is Direction.INBOUND

	def to_dict(self) -> dict[str, Any]:
		"""Plain representation of the edge."""
		return {
			"relation_type": self.relation_type,
			"direction": self.direction.value,
			"targets": list(self.targets),
		}


@dataclass(frozen=True)
class GraphNode:
	"""A node in a relationship graph: its name and outgoing or incoming edges."""

	name: str = ""
	edges: tuple[GraphEdge, ...] = field(default_factory=tuple)

	def __post_init__(self) -> None:
		"""Normalise the node name."""
		object.__setattr__(self, "name", (self.name or "").strip())

	@property
	def is_empty(self) -> bool:
		"""A node without a name is invalid or absent."""
		return not self.name

	def edges_of(self, relation_type: str, direction: Direction | None = None) -> list[GraphEdge]:
		"""Return the edges with the given relation, optionally filtered by direction."""
		return [
			edge
			for edge in self.edges
			if edge.relation_type == relation_type and (direction is None or edge.direction is direction)
		]

	def to_dict(self) -> dict[str, Any]:
		"""Plain representation of the node and its edges."""
		return {"name": self.name, "edges": [edge.to_dict() for edge in self.edges]}
