"""Tests for the command-line interface."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest
import yaml
from typer.testing import CliRunner

from graphcheck.cli import app
from graphcheck.config import DEFAULT_CONFIG
from graphcheck.utils.config_loader import CONFIG_FILE_NAME
from tests.conftest import SOURCE_DIR, write_java

if TYPE_CHECKING:
	from pathlib import Path

# Wide terminal so rich does not wrap long messages
WIDE = {"COLUMNS": "250"}

DOCUMENTED_ORDER_SERVICE = """\
package com.example.order;

import com.example.payment.PaymentService;

/**
 * @aicontext-graph
 * OrderService
 *   ├─[uses]→ PaymentService, InventoryClient
 *   └─[calls]→ PaymentService.pay()
 */
public class OrderService {
    private PaymentService paymentService;
}
"""


@pytest.fixture
def runner() -> CliRunner:
	"""CLI runner for invoking commands."""
	return CliRunner()


@pytest.mark.cli
@pytest.mark.fs
class TestValidateCommand:
	"""Test cases for the 'validate' command."""

	def test_undocumented_dependency_fails(self, runner: CliRunner, java_project: Path) -> None:
		"""The run fails and lists every undocumented dependency."""
		result = runner.invoke(app, ["validate", str(java_project)], env=WIDE)

		assert result.exit_code == 1
		assert "Class dependency 'PaymentService' found but not in graph." in result.stdout
		assert "Graph validation failed" in result.stdout

	def test_documented_project_passes(self, runner: CliRunner, java_project: Path) -> None:
		"""A fully documented project passes and shows lenient warnings."""
		write_java(java_project / SOURCE_DIR, "com/example/order/OrderService.java", DOCUMENTED_ORDER_SERVICE)

		result = runner.invoke(app, ["validate", str(java_project)], env=WIDE)

		assert result.exit_code == 0, result.stdout
		assert "Graph validation passed (2 graph(s) checked, 0 skipped)" in result.stdout
		assert "Graph documents 'InventoryClient' but code does not use it (lenient)." in result.stdout

	def test_dependency_in_build_package_is_reported(self, runner: CliRunner, tmp_path: Path) -> None:
		"""Packages named like build output directories are indexed with the default config."""
		source_root = tmp_path / SOURCE_DIR
		write_java(
			source_root,
			"com/acme/Foo.java",
			"""\
			package com.acme;

			import com.acme.build.Pipeline;

			/**
			 * @aicontext-graph
			 * Foo
			 *   ├─[uses]→ Nothing
			 */
			public class Foo {
			    private Pipeline pipeline;
			}
			""",
		)
		write_java(source_root, "com/acme/build/Pipeline.java", "package com.acme.build;\npublic class Pipeline {}\n")

		result = runner.invoke(app, ["validate", str(tmp_path)], env=WIDE)

		assert result.exit_code == 1
		assert "Class dependency 'Pipeline' found but not in graph." in result.stdout

	def test_disabled_in_config(self, runner: CliRunner, java_project: Path) -> None:
		"""Validation can be switched off in the project config."""
		(java_project / CONFIG_FILE_NAME).write_text(yaml.dump({"validate": {"enabled": False}}))

		with patch("graphcheck.cli.GraphValidator") as mock_validator:
			result = runner.invoke(app, ["validate", str(java_project)], env=WIDE)

		assert result.exit_code == 0
		assert "disabled" in result.stdout
		mock_validator.assert_not_called()

	def test_source_dir_option(self, runner: CliRunner, java_project: Path) -> None:
		"""--source-dir overrides the configured source root."""
		other = java_project / "other"
		write_java(other, "Clean.java", "/**\n * @aicontext-graph\n * Clean\n */\nclass Clean {}\n")

		result = runner.invoke(app, ["validate", str(java_project), "--source-dir", str(other)], env=WIDE)

		assert result.exit_code == 0, result.stdout
		assert "1 graph(s) checked" in result.stdout

	def test_missing_source_dir(self, runner: CliRunner, tmp_path: Path) -> None:
		"""A project without sources has nothing to validate."""
		result = runner.invoke(app, ["validate", str(tmp_path)], env=WIDE)

		assert result.exit_code == 0
		assert "Source directory does not exist" in result.stdout

	def test_broken_config(self, runner: CliRunner, java_project: Path) -> None:
		"""An unreadable config file fails the run."""
		(java_project / CONFIG_FILE_NAME).write_text("invalid: yaml: content: :")

		result = runner.invoke(app, ["validate", str(java_project)], env=WIDE)

		assert result.exit_code == 1
		assert "Error loading configuration" in result.stdout

	@patch("graphcheck.cli.setup_logging")
	def test_verbose_flag(self, mock_setup_logging: MagicMock, runner: CliRunner, tmp_path: Path) -> None:
		"""--verbose enables debug logging."""
		runner.invoke(app, ["validate", str(tmp_path), "--verbose"], env=WIDE)

		mock_setup_logging.assert_called_once_with(is_verbose=True)


@pytest.mark.cli
@pytest.mark.fs
class TestSuggestCommand:
	"""Test cases for the 'suggest' command."""

	def test_writes_to_configured_dir(self, runner: CliRunner, java_project: Path) -> None:
		"""Suggestions land in the configured output directory."""
		result = runner.invoke(app, ["suggest", str(java_project)], env=WIDE)

		output_dir = java_project / DEFAULT_CONFIG["suggest"]["output_dir"]
		assert result.exit_code == 0, result.stdout
		assert "Wrote 4 suggested graph(s)" in result.stdout
		assert (output_dir / "OrderService.txt").is_file()

	def test_output_option(self, runner: CliRunner, java_project: Path) -> None:
		"""--output overrides the configured directory."""
		result = runner.invoke(app, ["suggest", str(java_project), "--output", "graphs"], env=WIDE)

		assert result.exit_code == 0, result.stdout
		assert (java_project / "graphs" / "PaymentService.txt").is_file()


@pytest.mark.cli
@pytest.mark.fs
class TestShowCommand:
	"""Test cases for the 'show' command."""

	def test_tree_output(self, runner: CliRunner, java_project: Path) -> None:
		"""Graphs are printed as a tree of nodes and edges."""
		java_file = java_project / SOURCE_DIR / "com/example/payment/PaymentService.java"

		result = runner.invoke(app, ["show", str(java_file)], env=WIDE)

		assert result.exit_code == 0, result.stdout
		assert "com.example.payment.PaymentService" in result.stdout
		assert "[uses]→ StripeClient, PaymentRepository" in result.stdout
		assert "[by]← OrderService.checkout()" in result.stdout

	def test_json_output(self, runner: CliRunner, java_project: Path) -> None:
		"""--json prints the parsed graphs."""
		java_file = java_project / SOURCE_DIR / "com/example/payment/PaymentService.java"

		result = runner.invoke(app, ["show", str(java_file), "--json"], env=WIDE)

		assert result.exit_code == 0, result.stdout
		payload = json.loads(result.stdout)
		assert len(payload) == 1
		node = payload[0]["nodes"][0]
		assert node["name"] == "PaymentService"
		assert node["edges"][0] == {
			"relation_type": "uses",
			"direction": "outbound",
			"targets": ["StripeClient", "PaymentRepository"],
		}
		assert node["edges"][2]["targets"] == ["W:payment_transactions(id,user_id,amount)"]

	def test_file_without_graphs(self, runner: CliRunner, java_project: Path) -> None:
		"""Files without graph tags say so."""
		java_file = java_project / SOURCE_DIR / "com/example/client/StripeClient.java"

		result = runner.invoke(app, ["show", str(java_file)], env=WIDE)

		assert result.exit_code == 0
		assert "No @aicontext-graph tags" in result.stdout


@pytest.mark.cli
@pytest.mark.fs
class TestInitCommand:
	"""Test cases for the 'init' command."""

	def test_writes_default_config(self, runner: CliRunner, tmp_path: Path) -> None:
		"""The default configuration is written to the project."""
		result = runner.invoke(app, ["init", str(tmp_path)], env=WIDE)

		assert result.exit_code == 0, result.stdout
		assert yaml.safe_load((tmp_path / CONFIG_FILE_NAME).read_text()) == DEFAULT_CONFIG

	def test_existing_config_needs_force(self, runner: CliRunner, tmp_path: Path) -> None:
		"""An existing config is only replaced with --force."""
		config_file = tmp_path / CONFIG_FILE_NAME
		config_file.write_text("tags:\n  prefix: mine\n")

		result = runner.invoke(app, ["init", str(tmp_path)], env=WIDE)

		assert result.exit_code == 1
		assert "already exists" in result.stdout
		assert "mine" in config_file.read_text()

		result = runner.invoke(app, ["init", str(tmp_path), "--force"], env=WIDE)

		assert result.exit_code == 0
		assert "mine" not in config_file.read_text()
