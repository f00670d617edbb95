"""Command-line interface for the graphcheck tool."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich.markup import escape
from rich.tree import Tree
from typing_extensions import TypeAlias

from .analysis.java import parse_java_file
from .config import DEFAULT_CONFIG
from .exceptions import ConfigError, GraphValidationError
from .graph.notation import parse_blocks
from .graph.suggest import generate_suggested_graphs
from .tags.extractor import GRAPH_IGNORE_TAG, GRAPH_TAG, EntryLevel, extract_entries, scan_source_tree, tag_name
from .utils.config_loader import CONFIG_FILE_NAME, ConfigLoader
from .utils.log_setup import console, display_error_summary, display_warning_summary, setup_logging
from .validation.validator import GraphValidator

logger = logging.getLogger(__name__)

app = typer.Typer(
	help="GraphCheck - Validate documented class relationship graphs against the code.",
)

# Type aliases for CLI parameters
PathArg: TypeAlias = Annotated[
	Path,
	typer.Argument(
		exists=True,
		file_okay=False,
		help="Project directory",
		show_default=True,
	),
]
FileArg: TypeAlias = Annotated[
	Path,
	typer.Argument(
		exists=True,
		dir_okay=False,
		help="Java source file",
	),
]
ConfigOpt: TypeAlias = Annotated[
	Path | None,
	typer.Option(
		"--config",
		"-c",
		help="Path to config file",
	),
]
SourceDirOpt: TypeAlias = Annotated[
	Path | None,
	typer.Option(
		"--source-dir",
		"-s",
		help="Java source root (overrides config)",
	),
]
OutputOpt: TypeAlias = Annotated[
	Path | None,
	typer.Option(
		"--output",
		"-o",
		help="Output directory (overrides config)",
	),
]
PrefixOpt: TypeAlias = Annotated[
	str | None,
	typer.Option(
		"--prefix",
		help="Javadoc tag prefix (overrides config)",
	),
]
JsonFlag: TypeAlias = Annotated[
	bool,
	typer.Option(
		"--json",
		help="Print parsed graphs as JSON",
	),
]
VerboseFlag: TypeAlias = Annotated[
	bool,
	typer.Option(
		"--verbose",
		"-v",
		help="Enable verbose logging",
	),
]
ForceFlag: TypeAlias = Annotated[
	bool,
	typer.Option(
		"--force",
		"-f",
		help="Force overwrite existing files",
	),
]


def _load_config(project_root: Path, config: Path | None) -> ConfigLoader:
	"""Load configuration for a project, exiting on configuration errors."""
	try:
		return ConfigLoader(str(config) if config else None, repo_root=project_root)
	except ConfigError as e:
		display_error_summary(str(e))
		raise typer.Exit(1) from e


def _resolve_dir(project_root: Path, override: Path | None, configured: str) -> Path:
	"""Resolve a directory from a CLI override or a project-relative config value."""
	path = override if override is not None else Path(configured)
	if not path.is_absolute():
		path = project_root / path
	return path


@app.command()
def validate(
	path: PathArg = Path(),
	config: ConfigOpt = None,
	source_dir: SourceDirOpt = None,
	is_verbose: VerboseFlag = False,
) -> None:
	"""Check that every graph tag documents the project types its class uses."""
	setup_logging(is_verbose=is_verbose)
	project_root = path.resolve()
	config_loader = _load_config(project_root, config)

	if not config_loader.is_validation_enabled():
		console.print("[yellow]Graph validation is disabled in the configuration.")
		return

	sources = _resolve_dir(project_root, source_dir, config_loader.get_source_dir())
	if not sources.is_dir():
		console.print(f"[yellow]Source directory does not exist: {sources}")
		return

	exclude = config_loader.get_exclude_patterns()
	prefix = config_loader.get_tag_prefix()
	logger.debug("Validating graph tags under %s with prefix %s", sources, prefix)

	with console.status("Scanning documentation tags..."):
		entries = scan_source_tree(sources, prefix, exclude, relative_to=project_root)

	validator = GraphValidator(sources, base_dir=project_root, exclude=exclude, tag_prefix=prefix)
	try:
		report = validator.enforce(entries)
	except GraphValidationError as e:
		display_error_summary("\n".join([*e.errors, "", str(e)]))
		raise typer.Exit(1) from e

	if report.warnings:
		display_warning_summary("\n".join(report.warnings))
	console.print(f"[green]Graph validation passed ({report.checked} graph(s) checked, {report.skipped} skipped).")


@app.command()
def suggest(
	path: PathArg = Path(),
	output: OutputOpt = None,
	config: ConfigOpt = None,
	source_dir: SourceDirOpt = None,
	is_verbose: VerboseFlag = False,
) -> None:
	"""Write a suggested graph for every class, built from its real dependencies."""
	setup_logging(is_verbose=is_verbose)
	project_root = path.resolve()
	config_loader = _load_config(project_root, config)

	sources = _resolve_dir(project_root, source_dir, config_loader.get_source_dir())
	output_dir = _resolve_dir(project_root, output, config_loader.get_suggest_output_dir())

	try:
		with console.status("Generating suggested graphs..."):
			written = generate_suggested_graphs(sources, output_dir, config_loader.get_exclude_patterns())
	except OSError as e:
		console.print(f"[red]File system error: {e!s}")
		raise typer.Exit(1) from e

	console.print(f"[green]Wrote {len(written)} suggested graph(s) to {output_dir}")


@app.command()
def show(
	file: FileArg,
	prefix: PrefixOpt = None,
	as_json: JsonFlag = False,
	is_verbose: VerboseFlag = False,
) -> None:
	"""Print the graph tags of one Java file."""
	setup_logging(is_verbose=is_verbose)
	tag_prefix = prefix or DEFAULT_CONFIG["tags"]["prefix"]

	try:
		tree = parse_java_file(file)
	except (OSError, ValueError) as e:
		console.print(f"[red]Could not read {file}: {e!s}")
		raise typer.Exit(1) from e

	entries = [
		entry
		for entry in extract_entries(tree.root_node, str(file), tag_prefix)
		if entry.level is EntryLevel.ARCHITECTURAL and entry.type in {GRAPH_TAG, GRAPH_IGNORE_TAG}
	]

	if as_json:
		payload = [
			{
				"location": entry.location,
				"line": entry.line_number,
				"type": entry.type,
				"nodes": [node.to_dict() for node in parse_blocks(entry.content)] if entry.type == GRAPH_TAG else [],
				"content": entry.content,
			}
			for entry in entries
		]
		typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
		return

	if not entries:
		console.print(f"[yellow]No {tag_name(GRAPH_TAG, tag_prefix)} tags in {file}")
		return

	for entry in entries:
		root = Tree(f"[bold]{entry.location}[/bold] ({tag_name(entry.type, tag_prefix)}, line {entry.line_number})")
		if entry.type == GRAPH_IGNORE_TAG:
			root.add(escape(entry.content), style="dim")
		for node in parse_blocks(entry.content) if entry.type == GRAPH_TAG else []:
			branch = root.add(f"[cyan]{escape(node.name)}")
			for edge in node.edges:
				arrow = "→" if edge.is_outbound else "←"
				branch.add(escape(f"[{edge.relation_type}]{arrow} {', '.join(edge.targets)}"))
		console.print(root)


@app.command()
def init(
	path: PathArg = Path(),
	force_flag: ForceFlag = False,
) -> None:
	"""Write a default configuration file into the project directory."""
	config_file = path.resolve() / CONFIG_FILE_NAME

	if config_file.exists() and not force_flag:
		console.print(f"[yellow]GraphCheck config already exists: {config_file}")
		console.print("[yellow]Use --force to overwrite.")
		raise typer.Exit(1)

	try:
		config_file.write_text(yaml.dump(DEFAULT_CONFIG, sort_keys=False), encoding="utf-8")
	except OSError as e:
		console.print(f"[red]File system error: {e!s}")
		raise typer.Exit(1) from e

	console.print(f"[green]Created config file: {config_file}")


def main() -> None:
	"""Entry point for the CLI."""
	app()


if __name__ == "__main__":
	main()
