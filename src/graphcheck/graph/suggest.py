"""Generate suggested graph blocks from the dependencies found in code."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graphcheck.analysis.class_index import build_project_class_index
from graphcheck.analysis.dependencies import find_used_project_types
from graphcheck.analysis.java import declaration_name, iter_type_declarations, parse_java_file
from graphcheck.utils.file_utils import iter_source_files

if TYPE_CHECKING:
	from collections.abc import Iterable, Set
	from pathlib import Path

logger = logging.getLogger(__name__)

SUGGESTION_HEADER = (
	"# Suggested graph for this class.\n"
	"# Review and copy the block below into the class-level Javadoc graph tag.\n"
	"# Add [calls], [db], [events], [by] as needed.\n\n"
)


def format_suggested_graph(class_name: str, used: Set[str]) -> str:
	"""
	Render a graph block listing the types a class uses.

	Args:
		class_name: Simple name of the class
		used: Project types the class references

	Returns:
		Graph notation text ending with a newline
	"""
	lines = [class_name]
	if used:
		lines.append(f"  ├─[uses]→ {', '.join(sorted(used))}")
	else:
		lines.append("  # ├─[uses]→ (none detected)")
	lines.append("  # Add more edges: [calls], [db], [events], [by]←, [external], [config]")
	return "\n".join(lines) + "\n"


def generate_suggested_graphs(source_dir: Path, output_dir: Path, exclude: Iterable[str] = ()) -> list[Path]:
	"""
	Write a suggested graph file for every type declared under a source directory.

	Files are named after the simple type name, so types sharing a simple
	name overwrite each other and the last one scanned wins.

	Args:
		source_dir: Root of the Java sources
		output_dir: Directory receiving `<TypeName>.txt` files
		exclude: Glob patterns of paths to skip

	Returns:
		Paths of the files written
	"""
	if not source_dir.is_dir():
		logger.warning("Source directory does not exist: %s", source_dir)
		return []

	patterns = list(exclude)
	project_classes = build_project_class_index(source_dir, patterns)
	output_dir.mkdir(parents=True, exist_ok=True)

	written: list[Path] = []
	for path in iter_source_files(source_dir, ".java", patterns):
		try:
			tree = parse_java_file(path)
		except (OSError, ValueError) as e:
			logger.warning("Could not parse %s: %s", path, e)
			continue

		for declaration in iter_type_declarations(tree.root_node):
			class_name = declaration_name(declaration)
			if not class_name:
				continue
			used = find_used_project_types(declaration, project_classes)
			out_file = output_dir / f"{class_name}.txt"
			out_file.write_text(SUGGESTION_HEADER + format_suggested_graph(class_name, used), encoding="utf-8")
			written.append(out_file)

	logger.info("Wrote %d suggested graph(s) to %s", len(written), output_dir)
	return written
