"""Extract documentation tags from Javadoc comments."""

from __future__ import annotations

import contextlib
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel

from graphcheck.analysis.java import (
	declaration_name,
	enclosing_type_name,
	iter_nodes,
	iter_type_declarations,
	javadoc_for,
	package_name,
	parse_java_file,
	start_line,
)
from graphcheck.utils.file_utils import iter_source_files

if TYPE_CHECKING:
	from collections.abc import Iterable
	from pathlib import Path

	from tree_sitter import Node

logger = logging.getLogger(__name__)

DEFAULT_TAG_PREFIX = "aicontext"

TAG_TYPES = ("rule", "decision", "context", "graph-ignore", "graph")

GRAPH_TAG = "graph"
GRAPH_IGNORE_TAG = "graph-ignore"

DATE_PATTERN = re.compile(r"\[(\d{4}-\d{2}-\d{2})\]")


class EntryLevel(str, Enum):
	"""Where a tag was written."""

	ARCHITECTURAL = "architectural"  # Javadoc of a type declaration
	IMPLEMENTATION = "implementation"  # Javadoc of a method


class DocEntry(BaseModel):
	"""One documentation tag found in the sources."""

	location: str
	file_path: str
	line_number: int
	level: EntryLevel
	type: str
	content: str
	timestamp: str | None = None


@dataclass
class TagData:
	"""A tag parsed out of a single comment."""

	type: str
	content: str
	timestamp: str | None = None


def tag_name(tag_type: str, prefix: str = DEFAULT_TAG_PREFIX) -> str:
	"""Return the tag as written in Javadoc, e.g. `@aicontext-graph`."""
	return f"@{prefix}-{tag_type}"


def _tag_pattern(prefix: str) -> re.Pattern[str]:
	escaped = re.escape(prefix)
	types = "|".join(re.escape(tag_type) for tag_type in TAG_TYPES)
	return re.compile(rf"@{escaped}-({types})\s+(.+?)(?=@{escaped}-|$)", re.DOTALL)


def _clean_content(content: str) -> str:
	# Content starting on the next line, or followed by another tag, keeps a stray continuation `*`
	content = content.strip()
	if content.startswith("*"):
		content = content[1:].lstrip()
	if content.endswith("*"):
		content = content[:-1].rstrip()
	return content


def extract_tags(javadoc: str, prefix: str = DEFAULT_TAG_PREFIX) -> list[TagData]:
	"""
	Extract the tags of one Javadoc comment.

	A tag's content runs until the next tag with the same prefix or the end
	of the comment. A `[YYYY-MM-DD]` date in the content becomes the tag's
	timestamp.

	Args:
		javadoc: Comment body without the `/**` and `*/` delimiters
		prefix: Tag prefix

	Returns:
		Tags in the order they are written
	"""
	tags = []
	for match in _tag_pattern(prefix).finditer(javadoc):
		tag_type = match.group(1)
		content = _clean_content(match.group(2))

		timestamp = None
		date_match = DATE_PATTERN.search(content)
		if date_match:
			timestamp = date_match.group(1)
			content = re.sub(rf"\[{re.escape(timestamp)}\]\s*", "", content, count=1)

		tags.append(TagData(tag_type, content, timestamp))
	return tags


def extract_entries(root: Node, file_path: str, prefix: str = DEFAULT_TAG_PREFIX) -> list[DocEntry]:
	"""
	Collect the tag entries of one parsed Java file.

	Type declarations produce architectural entries located at
	`<package>.<Type>`; methods produce implementation entries located at
	`<package>.<Type>.<method>()`.

	Args:
		root: Root node of the parsed file
		file_path: Path recorded on every entry
		prefix: Tag prefix

	Returns:
		Entries of the file, type declarations first
	"""
	package = package_name(root)

	def qualify(name: str) -> str:
		return f"{package}.{name}" if package else name

	entries: list[DocEntry] = []
	for declaration in iter_type_declarations(root):
		javadoc = javadoc_for(declaration)
		if not javadoc:
			continue
		location = qualify(declaration_name(declaration))
		entries.extend(
			DocEntry(
				location=location,
				file_path=file_path,
				line_number=start_line(declaration),
				level=EntryLevel.ARCHITECTURAL,
				type=tag.type,
				content=tag.content,
				timestamp=tag.timestamp,
			)
			for tag in extract_tags(javadoc, prefix)
		)

	for node in iter_nodes(root):
		if node.type != "method_declaration":
			continue
		javadoc = javadoc_for(node)
		if not javadoc:
			continue
		owner = enclosing_type_name(node) or "Unknown"
		location = qualify(f"{owner}.{declaration_name(node)}()")
		entries.extend(
			DocEntry(
				location=location,
				file_path=file_path,
				line_number=start_line(node),
				level=EntryLevel.IMPLEMENTATION,
				type=tag.type,
				content=tag.content,
				timestamp=tag.timestamp,
			)
			for tag in extract_tags(javadoc, prefix)
		)

	return entries


def scan_source_tree(
	source_dir: Path,
	prefix: str = DEFAULT_TAG_PREFIX,
	exclude: Iterable[str] = (),
	relative_to: Path | None = None,
) -> list[DocEntry]:
	"""
	Collect the tag entries of every Java file under a source directory.

	Args:
		source_dir: Root of the Java sources
		prefix: Tag prefix
		exclude: Glob patterns of paths to skip
		relative_to: Record file paths relative to this directory when possible

	Returns:
		All entries, architectural ones first
	"""
	entries: list[DocEntry] = []
	for path in iter_source_files(source_dir, ".java", exclude):
		try:
			tree = parse_java_file(path)
		except (OSError, ValueError) as e:
			logger.warning("Failed to parse %s: %s", path, e)
			continue
		entries.extend(extract_entries(tree.root_node, _display_path(path, relative_to), prefix))

	entries.sort(key=lambda entry: entry.level is not EntryLevel.ARCHITECTURAL)
	logger.debug("Found %d documentation tags under %s", len(entries), source_dir)
	return entries


def _display_path(path: Path, relative_to: Path | None) -> str:
	if relative_to is not None:
		with contextlib.suppress(ValueError):
			return str(path.resolve().relative_to(relative_to.resolve()))
	return str(path)
