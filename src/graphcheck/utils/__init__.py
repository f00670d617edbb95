"""Utility module for GraphCheck package."""

from .file_utils import iter_source_files, read_file_content, resolve_source_path
from .log_setup import console, display_error_summary, display_warning_summary, setup_logging

__all__ = [
	"console",
	"display_error_summary",
	"display_warning_summary",
	"iter_source_files",
	"read_file_content",
	"resolve_source_path",
	"setup_logging",
]
