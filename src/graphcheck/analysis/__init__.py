"""
Static analysis of Java sources.

This package contains the pieces that read real dependencies out of code:
- java: tree-sitter parsing and declaration lookup
- class_index: the set of type names declared in a project
- dependencies: the project types one declaration references

"""

from __future__ import annotations

from graphcheck.analysis.class_index import build_project_class_index, collect_declared_type_names
from graphcheck.analysis.dependencies import find_used_project_types
from graphcheck.analysis.java import find_type_declaration, parse_java, parse_java_file

__all__ = [
	"build_project_class_index",
	"collect_declared_type_names",
	"find_type_declaration",
	"find_used_project_types",
	"parse_java",
	"parse_java_file",
]
