"""Utility functions for file operations in GraphCheck."""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)


def read_file_content(file_path: Path | str) -> str:
	"""
	Read content from a file with proper error handling.

	Args:
	    file_path: Path to the file to read

	Returns:
	    Content of the file as string

	Raises:
	    OSError: If the file cannot be read

	"""
	path_obj = Path(file_path)
	try:
		with path_obj.open("r", encoding="utf-8") as f:
			return f.read()
	except UnicodeDecodeError:
		logger.warning("File %s contains non-UTF-8 characters, attempting to decode with errors='replace'", path_obj)
		with path_obj.open("rb") as f:
			return f.read().decode("utf-8", errors="replace")


def matches_any(relative_path: Path, patterns: Iterable[str]) -> bool:
	"""
	Check whether a relative path matches one of the exclude patterns.

	Patterns containing a slash are matched against the whole path, other
	patterns against each path component.

	Args:
	    relative_path: Path relative to the scanned root
	    patterns: Glob patterns

	Returns:
	    True if the path is excluded

	"""
	path_str = relative_path.as_posix()
	for raw_pattern in patterns:
		pattern = raw_pattern.rstrip("/")
		if not pattern:
			continue
		if "/" in pattern:
			if fnmatch.fnmatch(path_str, pattern) or fnmatch.fnmatch(path_str, f"{pattern}/*"):
				return True
		elif any(fnmatch.fnmatch(part, pattern) for part in relative_path.parts):
			return True
	return False


def iter_source_files(root: Path, suffix: str = ".java", exclude: Iterable[str] = ()) -> Iterator[Path]:
	"""
	Yield source files below a root directory in a stable order.

	Args:
	    root: Directory to scan
	    suffix: File suffix to select
	    exclude: Glob patterns of paths to skip

	Yields:
	    Paths of matching files

	"""
	if not root.is_dir():
		logger.debug("Source directory does not exist: %s", root)
		return

	patterns = list(exclude)
	for path in sorted(root.rglob(f"*{suffix}")):
		if not path.is_file():
			continue
		if patterns and matches_any(path.relative_to(root), patterns):
			logger.debug("Skipping excluded file %s", path)
			continue
		yield path


def resolve_source_path(file_path: str | Path, base_dir: Path | None = None) -> Path | None:
	"""
	Locate a source file recorded by the tag extractor.

	The recorded path is tried as-is first, then relative to the project
	base directory.

	Args:
	    file_path: Recorded file path, possibly relative
	    base_dir: Project base directory

	Returns:
	    The readable path, or None if the file cannot be found

	"""
	path = Path(file_path)
	if path.is_file():
		return path
	if base_dir is not None:
		candidate = base_dir / path
		if candidate.is_file():
			return candidate
	return None
