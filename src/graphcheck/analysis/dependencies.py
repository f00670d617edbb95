"""Extract the project types a Java type declaration depends on."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graphcheck.analysis.java import declaration_name, node_text

if TYPE_CHECKING:
	from collections.abc import Iterator, Set

	from tree_sitter import Node

logger = logging.getLogger(__name__)

# Members whose declared type is recorded
TYPED_MEMBERS = frozenset({"field_declaration", "constant_declaration", "annotation_type_element_declaration"})

# Type nodes whose children are themselves types (generic arguments, qualifying scopes, bounds)
COMPOSITE_TYPES = frozenset({"generic_type", "scoped_type_identifier", "type_arguments", "wildcard", "annotated_type"})

ANNOTATION_NODES = frozenset({"annotation", "marker_annotation"})


def find_used_project_types(declaration: Node, project_classes: Set[str]) -> set[str]:
	"""
	Collect the simple names of project types used by a type declaration.

	Every member of the declaration body is examined: field types
	(annotated or injected fields included), constructor parameter types, and
	method parameter and return types. Record components count as fields.
	Generic arguments and qualifying scopes are searched as well, so
	`List<Foo>` and `Outer.Inner` both contribute.

	Args:
		declaration: A class, interface, enum, record or annotation declaration
		project_classes: Simple names of all types declared in the project

	Returns:
		Project type names referenced by the declaration, never its own name
	"""
	own_name = declaration_name(declaration)
	used: set[str] = set()

	for type_node in _member_types(declaration):
		_collect_type_names(type_node, project_classes, own_name, used)

	logger.debug("Type %s uses project types: %s", own_name, sorted(used))
	return used


def _member_types(declaration: Node) -> Iterator[Node]:
	"""Yield the type nodes of every structural member of a declaration."""
	# Record components live in the header rather than the body
	if declaration.type == "record_declaration":
		yield from _parameter_types(declaration.child_by_field_name("parameters"))

	for member in _body_members(declaration):
		if member.type in TYPED_MEMBERS:
			type_node = member.child_by_field_name("type")
			if type_node is not None:
				yield type_node
		elif member.type == "constructor_declaration":
			yield from _parameter_types(member.child_by_field_name("parameters"))
		elif member.type == "method_declaration":
			yield from _parameter_types(member.child_by_field_name("parameters"))
			return_type = member.child_by_field_name("type")
			if return_type is not None:
				yield return_type


def _body_members(declaration: Node) -> Iterator[Node]:
	body = declaration.child_by_field_name("body")
	if body is None:
		return
	for child in body.named_children:
		# Enum members follow the constant list
		if child.type == "enum_body_declarations":
			yield from child.named_children
		else:
			yield child


def _parameter_types(parameters: Node | None) -> Iterator[Node]:
	if parameters is None:
		return
	for parameter in parameters.named_children:
		if parameter.type == "formal_parameter":
			type_node = parameter.child_by_field_name("type")
			if type_node is not None:
				yield type_node
		elif parameter.type == "spread_parameter":
			for child in parameter.named_children:
				if child.type not in {"modifiers", "variable_declarator"} and child.type not in ANNOTATION_NODES:
					yield child


def _collect_type_names(type_node: Node, project_classes: Set[str], own_name: str, out: set[str]) -> None:
	"""Add project type names found in one type, descending into arguments and scopes."""
	node_type = type_node.type
	if node_type == "type_identifier":
		name = node_text(type_node)
		if name != own_name and name in project_classes:
			out.add(name)
	elif node_type in COMPOSITE_TYPES:
		for child in type_node.named_children:
			if child.type not in ANNOTATION_NODES:
				_collect_type_names(child, project_classes, own_name, out)
	elif node_type == "array_type":
		element = type_node.child_by_field_name("element")
		if element is not None:
			_collect_type_names(element, project_classes, own_name, out)
