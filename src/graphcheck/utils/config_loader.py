"""
Configuration loader for GraphCheck.

Settings come from three layers, later ones winning: the built-in defaults,
one YAML file, and `GRAPHCHECK_<SECTION>_<KEY>` environment variables.

"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, TypeVar, cast

import yaml
from xdg.BaseDirectory import xdg_config_home

from graphcheck.config import DEFAULT_CONFIG
from graphcheck.exceptions import ConfigError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ENV_PREFIX = "GRAPHCHECK_"

# Section and key, e.g. GRAPHCHECK_PROJECT_SOURCE_DIR
MIN_ENV_VAR_PARTS = 2

CONFIG_FILE_NAME = ".graphcheck.yml"

ConfigValue = str | int | float | bool | dict[str, Any] | list[Any] | None

__all__ = ["CONFIG_FILE_NAME", "ConfigError", "ConfigLoader"]


def _coerce_env_value(value: str) -> ConfigValue:
	"""Turn an environment string into a bool, int, float or str."""
	lowered = value.lower()
	if lowered in ("true", "yes"):
		return True
	if lowered in ("false", "no"):
		return False
	for number_type in (int, float):
		try:
			return number_type(value)
		except ValueError:
			continue
	return value


class ConfigLoader:
	"""
	Configuration of one graphcheck run.

	The project directory is searched for `.graphcheck.yml` first, then the
	user's XDG config directory, then `~/.graphcheck/config.yml`.

	"""

	def __init__(self, config_file: str | None = None, repo_root: Path | None = None) -> None:
		"""
		Initialize the configuration loader.

		Args:
		        config_file: Explicit configuration file (optional)
		        repo_root: Project directory holding `.graphcheck.yml` (optional)

		Raises:
		        ConfigError: If the configuration file cannot be read or parsed

		"""
		self.repo_root = repo_root
		self.config: dict[str, Any] = {}
		self.config_file = self._resolve_config_file(config_file)
		self.load_config()

	def _resolve_config_file(self, config_file: str | None) -> Path | None:
		if config_file:
			path = Path(config_file).expanduser().resolve()
			if not path.exists():
				logger.warning("Specified config file not found: %s", path)
			return path

		candidates = [
			(self.repo_root or Path()) / CONFIG_FILE_NAME,
			Path(xdg_config_home) / "graphcheck" / "config.yml",
			Path.home() / ".graphcheck" / "config.yml",
		]
		return next((candidate for candidate in candidates if candidate.exists()), None)

	def load_config(self) -> dict[str, Any]:
		"""
		Rebuild the configuration from defaults, file and environment.

		Returns:
		        Dict[str, Any]: Loaded configuration

		Raises:
		        ConfigError: If the configuration file exists but cannot be loaded

		"""
		self.config = copy.deepcopy(DEFAULT_CONFIG)

		if self.config_file is not None and self.config_file.exists():
			try:
				with self.config_file.open(encoding="utf-8") as f:
					file_config = yaml.safe_load(f)
			except (OSError, yaml.YAMLError) as e:
				error_msg = f"Error loading configuration from {self.config_file}: {e}"
				logger.exception(error_msg)
				raise ConfigError(error_msg) from e

			if file_config:
				if not isinstance(file_config, dict):
					msg = f"Configuration in {self.config_file} must be a mapping"
					raise ConfigError(msg)
				self._merge_configs(self.config, file_config)
			logger.info("Loaded configuration from %s", self.config_file)

		self._apply_env_overrides()
		return self.config

	def _merge_configs(self, base: dict[str, Any], override: dict[str, Any]) -> None:
		"""Merge `override` into `base`, descending into nested sections."""
		for key, value in override.items():
			if isinstance(value, dict) and isinstance(base.get(key), dict):
				self._merge_configs(base[key], value)
			else:
				base[key] = value

	def _apply_env_overrides(self) -> None:
		for env_var, value in os.environ.items():
			if not env_var.startswith(ENV_PREFIX):
				continue
			parts = env_var[len(ENV_PREFIX) :].lower().split("_")
			if len(parts) < MIN_ENV_VAR_PARTS:
				continue
			section, key = parts[0], "_".join(parts[1:])

			if not isinstance(self.config.get(section), dict):
				self.config[section] = {}
			self.config[section][key] = _coerce_env_value(value)
			logger.debug("Applied environment override %s", env_var)

	def get(self, key: str, default: T = None) -> T:
		"""
		Look up a value by dotted key, e.g. `project.source_dir`.

		Args:
		        key: Configuration key, dots separate nested sections
		        default: Value returned when the key is missing

		Returns:
		        T: Configuration value or default

		"""
		current: Any = self.config
		for part in key.split("."):
			if not isinstance(current, dict) or part not in current:
				return default
			current = current[part]
		return cast("T", current)

	def get_source_dir(self) -> str:
		"""Java source root, relative to the project directory unless absolute."""
		return str(self.get("project.source_dir", DEFAULT_CONFIG["project"]["source_dir"]))

	def get_exclude_patterns(self) -> list[str]:
		"""Glob patterns, relative to the source root, skipped while scanning."""
		exclude = self.get("project.exclude", [])
		if isinstance(exclude, str):
			return [item.strip() for item in exclude.split(",") if item.strip()]
		return list(exclude or [])

	def get_tag_prefix(self) -> str:
		"""Javadoc tag prefix, as in `@<prefix>-graph`."""
		return str(self.get("tags.prefix", DEFAULT_CONFIG["tags"]["prefix"]))

	def is_validation_enabled(self) -> bool:
		"""Whether the validate command checks anything."""
		return bool(self.get("validate.enabled", True))

	def get_suggest_output_dir(self) -> str:
		"""Directory receiving suggested graphs, relative to the project directory unless absolute."""
		return str(self.get("suggest.output_dir", DEFAULT_CONFIG["suggest"]["output_dir"]))
