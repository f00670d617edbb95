"""
Parser for the compact relationship graph notation.

A graph is written as one or more blocks separated by blank lines. The
first plain line of a block names the node, the following lines are edges:

    PaymentService
      ├─[uses]→ StripeClient, PaymentRepository
      ├─[calls]→ StripeClient.charge(), PaymentRepository.save()
      ├─[db]→ W:payment_transactions(id,user_id,amount)
      └─[by]← OrderService.checkout()

Relation names are free text; uses, calls, db, events, by, external and
config are the conventional ones. Lines that are neither the node name nor
an edge are ignored, and Javadoc line prefixes (` * `) are stripped first, so
text copied straight out of a comment parses the same as plain text.

"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from graphcheck.graph.models import Direction, GraphEdge, GraphNode

if TYPE_CHECKING:
	from collections.abc import Iterable

logger = logging.getLogger(__name__)

# ├─ or └─, [relation], → or ←, targets
EDGE_LINE = re.compile(r"\s*[├└]─\s*\[([^\]]+)\]\s*([→←])\s*(.+)")

OUTBOUND_ARROW = "→"

USES_RELATION = "uses"

OPENING_BRACKETS = "([{"
CLOSING_BRACKETS = ")]}"


def strip_doc_prefix(line: str | None) -> str:
	"""Strip surrounding whitespace and one leading Javadoc `*` from a line."""
	if not line:
		return ""
	stripped = line.strip()
	if stripped.startswith("*"):
		stripped = stripped[1:].strip()
	return stripped


def simple_name(name: str | None) -> str:
	"""Return the text after the last dot, trimmed."""
	if not name:
		return ""
	return name.rsplit(".", 1)[-1].strip()


def split_targets(target_text: str | None) -> list[str]:
	"""
	Split edge targets on commas that are not nested in brackets.

	`W:orders(id,total), Cache[a,b]` gives `W:orders(id,total)` and `Cache[a,b]`.

	Args:
		target_text: Raw text after the arrow

	Returns:
		Trimmed, non-empty targets in declaration order
	"""
	if not target_text or not target_text.strip():
		return []

	targets = []
	depth = 0
	start = 0
	for index, char in enumerate(target_text):
		if char in OPENING_BRACKETS:
			depth += 1
		elif char in CLOSING_BRACKETS:
			depth -= 1
		elif char == "," and depth == 0:
			part = target_text[start:index].strip()
			if part:
				targets.append(part)
			start = index + 1

	last = target_text[start:].strip()
	if last:
		targets.append(last)
	return targets


def parse_edge(line: str) -> GraphEdge | None:
	"""
	Parse one edge line.

	Args:
		line: A line with any Javadoc prefix already removed

	Returns:
		The edge, or None if the line is not an edge or names no targets
	"""
	match = EDGE_LINE.fullmatch(line)
	if not match:
		return None
	relation, arrow, target_text = match.groups()
	targets = split_targets(target_text)
	if not targets:
		logger.debug("Dropping edge without targets: %s", line)
		return None
	direction = Direction.OUTBOUND if arrow == OUTBOUND_ARROW else Direction.INBOUND
	return GraphEdge(relation.strip(), direction, tuple(targets))


def is_edge_line(line: str) -> bool:
	"""Whether a normalised line has the shape of an edge."""
	return EDGE_LINE.fullmatch(line) is not None


def _parse_lines(lines: Iterable[str]) -> GraphNode:
	name: str | None = None
	edges: list[GraphEdge] = []
	for line in lines:
		if is_edge_line(line):
			edge = parse_edge(line)
			if edge is not None:
				edges.append(edge)
		elif name is None:
			name = line
	return GraphNode(name or "", tuple(edges))


def parse_block(block: str | None) -> GraphNode:
	"""
	Parse a single graph block: one node and its edges.

	Args:
		block: Multi-line text; the first non-edge line names the node

	Returns:
		The parsed node; its name is empty when the block has none
	"""
	if not block or not block.strip():
		return GraphNode()
	lines = (strip_doc_prefix(line) for line in block.splitlines())
	return _parse_lines(line for line in lines if line)


def _split_blocks(text: str) -> list[list[str]]:
	"""Group normalised lines into blocks separated by blank lines."""
	blocks: list[list[str]] = []
	current: list[str] = []
	for raw_line in text.splitlines():
		line = strip_doc_prefix(raw_line)
		if line:
			current.append(line)
		elif current:
			blocks.append(current)
			current = []
	if current:
		blocks.append(current)
	return blocks


def parse_blocks(content: str | None) -> list[GraphNode]:
	"""
	Parse every block of a graph description.

	Blocks that never name a node are dropped.

	Args:
		content: Full graph text, e.g. the body of a graph tag

	Returns:
		Parsed nodes in the order they appear
	"""
	if not content or not content.strip():
		return []
	nodes = [_parse_lines(lines) for lines in _split_blocks(content)]
	return [node for node in nodes if not node.is_empty]


def select_node(nodes: list[GraphNode], node_name: str | None) -> GraphNode | None:
	"""Pick the node with the given name, falling back to the first node."""
	if not nodes:
		return None
	if node_name:
		for node in nodes:
			if node.name == node_name:
				return node
	return nodes[0]


def get_documented_uses(content: str | None, node_name: str | None = None) -> list[str]:
	"""
	Return the simple names a graph documents as `[uses]→` targets.

	The node named `node_name` is used; when no node has that name (or no
	name is given) the first node in the content is used instead.

	Args:
		content: Full graph text
		node_name: Simple class name to look for

	Returns:
		De-duplicated simple names in documentation order
	"""
	node = select_node(parse_blocks(content), node_name)
	if node is None:
		return []

	uses: dict[str, None] = {}
	for edge in node.edges_of(USES_RELATION, Direction.OUTBOUND):
		for target in edge.targets:
			name = simple_name(target)
			if name:
				uses[name] = None
	return list(uses)
