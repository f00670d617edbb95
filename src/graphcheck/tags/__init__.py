"""Documentation tags read from Javadoc comments."""

from graphcheck.tags.extractor import (
	DEFAULT_TAG_PREFIX,
	GRAPH_IGNORE_TAG,
	GRAPH_TAG,
	DocEntry,
	EntryLevel,
	extract_entries,
	extract_tags,
	scan_source_tree,
	tag_name,
)

__all__ = [
	"DEFAULT_TAG_PREFIX",
	"GRAPH_IGNORE_TAG",
	"GRAPH_TAG",
	"DocEntry",
	"EntryLevel",
	"extract_entries",
	"extract_tags",
	"scan_source_tree",
	"tag_name",
]
