"""Exceptions raised by graphcheck."""

from __future__ import annotations


class GraphCheckError(Exception):
	"""Base class for graphcheck errors."""


class ConfigError(GraphCheckError):
	"""Exception raised for configuration errors."""


class GraphValidationError(GraphCheckError):
	"""Raised when classes use project types their graph does not document."""

	def __init__(self, errors: list[str], message: str | None = None) -> None:
		"""
		Initialize the validation error.

		Args:
		        errors: Every hard error found during the run
		        message: Optional summary message

		"""
		self.errors = list(errors)
		super().__init__(message or "Graph validation failed: dependency found but not documented. See errors above.")
