"""Graph validation against real class dependencies."""

from graphcheck.validation.validator import GraphValidator, ValidationReport, parse_graph_ignore

__all__ = ["GraphValidator", "ValidationReport", "parse_graph_ignore"]
