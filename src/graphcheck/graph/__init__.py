"""Relationship graph notation: models, parser and suggestions."""

from graphcheck.graph.models import Direction, GraphEdge, GraphNode
from graphcheck.graph.notation import get_documented_uses, parse_block, parse_blocks, split_targets

__all__ = [
	"Direction",
	"GraphEdge",
	"GraphNode",
	"get_documented_uses",
	"parse_block",
	"parse_blocks",
	"split_targets",
]
