"""Index of the type names declared in a project."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graphcheck.analysis.java import declaration_name, iter_type_declarations, parse_java_file
from graphcheck.utils.file_utils import iter_source_files

if TYPE_CHECKING:
	from collections.abc import Iterable
	from pathlib import Path

	from tree_sitter import Node

logger = logging.getLogger(__name__)


def collect_declared_type_names(root: Node) -> set[str]:
	"""Return the simple names of all types declared in one parsed file."""
	names = set()
	for declaration in iter_type_declarations(root):
		name = declaration_name(declaration)
		if name:
			names.add(name)
	return names


def build_project_class_index(source_root: Path, exclude: Iterable[str] = ()) -> frozenset[str]:
	"""
	Collect the simple name of every type declared under a source root.

	Files that cannot be read or parsed are skipped so a single broken file
	never aborts indexing.

	Args:
		source_root: Root directory of the Java sources
		exclude: Glob patterns of paths to skip

	Returns:
		Simple names of all project types
	"""
	names: set[str] = set()
	file_count = 0
	for path in iter_source_files(source_root, ".java", exclude):
		try:
			tree = parse_java_file(path)
		except (OSError, ValueError) as e:
			logger.debug("Skipping %s while indexing project classes: %s", path, e)
			continue
		names.update(collect_declared_type_names(tree.root_node))
		file_count += 1

	logger.debug("Indexed %d project types from %d files under %s", len(names), file_count, source_root)
	return frozenset(names)
