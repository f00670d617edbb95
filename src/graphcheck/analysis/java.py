"""Java syntax helpers built on tree-sitter."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from tree_sitter_language_pack import get_parser

from graphcheck.utils.file_utils import read_file_content

if TYPE_CHECKING:
	from collections.abc import Iterator
	from pathlib import Path

	from tree_sitter import Node, Parser, Tree

logger = logging.getLogger(__name__)

LANGUAGE_NAME = "java"

# Node types that declare a named type
TYPE_DECLARATION_NODES = frozenset(
	{
		"class_declaration",
		"interface_declaration",
		"enum_declaration",
		"record_declaration",
		"annotation_type_declaration",
	}
)

# Older grammars emit a single "comment" node type
COMMENT_NODES = frozenset({"block_comment", "comment"})


@lru_cache(maxsize=1)
def get_java_parser() -> Parser:
	"""Return the shared tree-sitter parser for Java."""
	logger.debug("Loading tree-sitter parser for %s", LANGUAGE_NAME)
	return get_parser(LANGUAGE_NAME)


def parse_java(source: bytes | str) -> Tree:
	"""
	Parse Java source into a syntax tree.

	tree-sitter recovers from syntax errors, so malformed input still yields
	a tree whose well-formed parts can be inspected.

	Args:
		source: Java source code

	Returns:
		The parsed tree
	"""
	if isinstance(source, str):
		source = source.encode("utf-8")
	return get_java_parser().parse(source)


def parse_java_file(path: Path) -> Tree:
	"""Read and parse one Java file. Raises OSError if it cannot be read."""
	tree = parse_java(read_file_content(path))
	if tree.root_node.has_error:
		logger.debug("Syntax errors while parsing %s, continuing with recovered tree", path)
	return tree


def node_text(node: Node | None) -> str:
	"""Decode the source text of a node."""
	if node is None or node.text is None:
		return ""
	return node.text.decode("utf-8", errors="replace")


def iter_nodes(node: Node) -> Iterator[Node]:
	"""Walk a subtree in pre-order."""
	stack = [node]
	while stack:
		current = stack.pop()
		yield current
		stack.extend(reversed(current.children))


def declaration_name(node: Node) -> str:
	"""Return the simple name of a type or method declaration."""
	return node_text(node.child_by_field_name("name"))


def iter_type_declarations(root: Node) -> Iterator[Node]:
	"""Yield every type declaration in a tree, nested and local ones included."""
	for node in iter_nodes(root):
		if node.type in TYPE_DECLARATION_NODES:
			yield node


def find_type_declaration(root: Node, name: str) -> Node | None:
	"""
	Find the first type declaration with the given simple name.

	Args:
		root: Root node of a parsed file
		name: Simple type name

	Returns:
		The declaration node, or None if the file declares no such type
	"""
	return next((node for node in iter_type_declarations(root) if declaration_name(node) == name), None)


def enclosing_type_name(node: Node) -> str | None:
	"""Return the name of the innermost type declaration containing a node."""
	parent = node.parent
	while parent is not None:
		if parent.type in TYPE_DECLARATION_NODES:
			return declaration_name(parent)
		parent = parent.parent
	return None


def package_name(root: Node) -> str:
	"""Return the package declared by a compilation unit, or '' for the default package."""
	for child in root.named_children:
		if child.type == "package_declaration":
			for part in child.named_children:
				if part.type in {"identifier", "scoped_identifier"}:
					return node_text(part)
	return ""


def javadoc_for(node: Node) -> str | None:
	"""
	Return the Javadoc comment attached to a declaration.

	The comment delimiters are removed; the leading `*` of each line is kept,
	as the consumers of the text strip it themselves.

	Args:
		node: A type or method declaration

	Returns:
		Comment body, or None if the declaration has no Javadoc
	"""
	previous = node.prev_named_sibling
	if previous is None or previous.type not in COMMENT_NODES:
		return None
	text = node_text(previous)
	if not text.startswith("/**") or not text.endswith("*/"):
		return None
	return text[3:-2]


def start_line(node: Node) -> int:
	"""1-based line where a node starts."""
	return node.start_point[0] + 1
