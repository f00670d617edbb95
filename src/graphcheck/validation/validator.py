"""
Validate documented relationship graphs against real class dependencies.

Every class whose Javadoc carries a graph tag must list, as `[uses]→`
targets, each project type it references through fields, constructor
parameters, method parameters or return types. Omissions are hard errors;
documented types the code does not reference only produce warnings, since a
graph may describe relationships static analysis cannot see. Names listed
in the companion graph-ignore tag are exempt in both directions.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from graphcheck.analysis.class_index import build_project_class_index
from graphcheck.analysis.dependencies import find_used_project_types
from graphcheck.analysis.java import find_type_declaration, parse_java_file
from graphcheck.exceptions import GraphValidationError
from graphcheck.graph.notation import get_documented_uses, simple_name
from graphcheck.tags.extractor import DEFAULT_TAG_PREFIX, GRAPH_IGNORE_TAG, GRAPH_TAG, EntryLevel, tag_name
from graphcheck.utils.file_utils import resolve_source_path

if TYPE_CHECKING:
	from collections.abc import Iterable, Sequence
	from pathlib import Path

	from graphcheck.tags.extractor import DocEntry

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
	"""Outcome of one validation run."""

	errors: list[str] = field(default_factory=list)
	warnings: list[str] = field(default_factory=list)
	checked: int = 0
	skipped: int = 0

	@property
	def passed(self) -> bool:
		"""True when no hard error was found."""
		return not self.errors


def parse_graph_ignore(content: str | None) -> set[str]:
	"""Split a graph-ignore tag into the names it exempts."""
	if not content or not content.strip():
		return set()
	return {item.strip() for item in content.split(",") if item.strip()}


class GraphValidator:
	"""Checks graph tags against the dependencies found in the Java sources."""

	def __init__(
		self,
		source_dir: Path,
		base_dir: Path | None = None,
		exclude: Iterable[str] = (),
		tag_prefix: str = DEFAULT_TAG_PREFIX,
	) -> None:
		"""
		Initialize the validator.

		Args:
		    source_dir: Root of the Java sources used to build the class index
		    base_dir: Project directory used to resolve relative file paths
		    exclude: Glob patterns of paths skipped while indexing
		    tag_prefix: Prefix of the graph tags, used in error messages

		"""
		self.source_dir = source_dir
		self.base_dir = base_dir
		self.exclude = list(exclude)
		self.tag_prefix = tag_prefix

	def validate(self, entries: Sequence[DocEntry]) -> ValidationReport:
		"""
		Compare every class-level graph tag with the class's real dependencies.

		Args:
		    entries: Documentation entries produced by the tag extractor

		Returns:
		    Report with the hard errors and lenient warnings of the run

		"""
		report = ValidationReport()

		graph_entries = [entry for entry in entries if _is_class_tag(entry, GRAPH_TAG)]
		if not graph_entries:
			logger.debug("No graph tags found, nothing to validate")
			return report

		ignore_by_location: dict[str, str] = {}
		for entry in entries:
			if _is_class_tag(entry, GRAPH_IGNORE_TAG):
				ignore_by_location.setdefault(entry.location, entry.content)

		project_classes = build_project_class_index(self.source_dir, self.exclude)

		for entry in graph_entries:
			if self._validate_entry(entry, project_classes, ignore_by_location.get(entry.location, ""), report):
				report.checked += 1
			else:
				report.skipped += 1

		logger.debug(
			"Validated %d graph(s), skipped %d: %d error(s), %d warning(s)",
			report.checked,
			report.skipped,
			len(report.errors),
			len(report.warnings),
		)
		return report

	def enforce(self, entries: Sequence[DocEntry]) -> ValidationReport:
		"""
		Validate and fail when any dependency is undocumented.

		Args:
		    entries: Documentation entries produced by the tag extractor

		Returns:
		    The report of a passing run

		Raises:
		    GraphValidationError: If at least one hard error was found

		"""
		report = self.validate(entries)
		if not report.passed:
			for error in report.errors:
				logger.error(error)
			raise GraphValidationError(report.errors)
		return report

	def _validate_entry(
		self,
		entry: DocEntry,
		project_classes: frozenset[str],
		ignore_content: str,
		report: ValidationReport,
	) -> bool:
		"""Check one graph tag; returns False when the class could not be located."""
		class_name = simple_name(entry.location)

		path = resolve_source_path(entry.file_path, self.base_dir)
		if path is None:
			logger.debug("Skipping graph validation for %s: file not found %s", entry.location, entry.file_path)
			return False

		try:
			tree = parse_java_file(path)
		except (OSError, ValueError) as e:
			logger.debug("Skipping graph validation for %s: could not parse %s: %s", entry.location, path, e)
			return False

		declaration = find_type_declaration(tree.root_node, class_name)
		if declaration is None:
			logger.debug("Skipping graph validation for %s: %s not declared in %s", entry.location, class_name, path)
			return False

		actual = find_used_project_types(declaration, project_classes)
		documented = get_documented_uses(entry.content, class_name)
		ignored = parse_graph_ignore(ignore_content)
		where = f"{entry.file_path}:{entry.line_number}"

		for dependency in sorted(actual):
			if dependency not in documented and dependency not in ignored:
				report.errors.append(
					f"{where}: Class dependency '{dependency}' found but not in graph. "
					f"Add to {tag_name(GRAPH_TAG, self.tag_prefix)} or {tag_name(GRAPH_IGNORE_TAG, self.tag_prefix)}."
				)

		for name in documented:
			if name not in actual and name not in ignored:
				warning = f"{where} Graph documents '{name}' but code does not use it (lenient)."
				logger.warning(warning)
				report.warnings.append(warning)

		return True


def _is_class_tag(entry: DocEntry, tag_type: str) -> bool:
	return entry.level is EntryLevel.ARCHITECTURAL and entry.type == tag_type

