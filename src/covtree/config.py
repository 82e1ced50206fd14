"""Report configuration stored as YAML.

Example::

    name: Test report
    output: coverage-report
    reporter: html
    inputs:
      - path: build/lcov.info
        name: Core
        prefix: ${SRC_ROOT}/core
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from covtree.aggregation.base import DEFAULT_REPORT_NAME
from covtree.errors import ConfigurationError

logger = logging.getLogger(__name__)

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")

REPORTERS = ("html", "text")


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_value(value: Any) -> Any:
    if isinstance(value, str):
        return _resolve_env_vars(value)
    if isinstance(value, dict):
        return _resolve_dict(value)
    if isinstance(value, list):
        return [_resolve_value(item) for item in value]
    return value


def _resolve_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively resolve environment variables in a dictionary."""
    return {key: _resolve_value(value) for key, value in data.items()}


@dataclass
class InputConfig:
    """One coverage tracefile to include in the report."""

    path: str
    """Path of the LCOV tracefile."""

    name: str | None = None
    """Display name; defaults to the last component of the prefix."""

    prefix: str | None = None
    """Directory stripped from every source path; inferred when unset."""


@dataclass
class ReportConfig:
    """Everything needed to generate one report."""

    output: str
    """Directory the report is written into."""

    name: str = DEFAULT_REPORT_NAME
    """Title of the report."""

    inputs: list[InputConfig] = field(default_factory=list)
    """Coverage inputs, in the order they appear in the report."""

    reporter: str = "html"
    """Output format: ``html`` (multi-page site) or ``text`` (single summary)."""

    def to_dict(self) -> dict[str, Any]:
        """Return a YAML-serializable mapping, omitting unset input fields."""
        inputs: list[dict[str, Any]] = []
        for item in self.inputs:
            entry: dict[str, Any] = {"path": item.path}
            if item.name is not None:
                entry["name"] = item.name
            if item.prefix is not None:
                entry["prefix"] = item.prefix
            inputs.append(entry)
        return {
            "name": self.name,
            "output": self.output,
            "reporter": self.reporter,
            "inputs": inputs,
        }


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _parse_input_config(raw: Any, index: int) -> InputConfig:
    if isinstance(raw, str):
        return InputConfig(path=raw)
    if not isinstance(raw, dict):
        raise ConfigurationError(f"inputs[{index}] must be a mapping or a path")
    return InputConfig(
        path=str(raw.get("path", "")),
        name=_optional_str(raw.get("name")),
        prefix=_optional_str(raw.get("prefix")),
    )


def parse_config(raw: dict[str, Any]) -> ReportConfig:
    """Build a :class:`ReportConfig` from an already loaded mapping."""
    inputs_raw = raw.get("inputs", [])
    if not isinstance(inputs_raw, list):
        raise ConfigurationError("inputs must be a list")

    return ReportConfig(
        output=str(raw.get("output", "")),
        name=str(raw.get("name") or DEFAULT_REPORT_NAME),
        inputs=[_parse_input_config(item, i) for i, item in enumerate(inputs_raw)],
        reporter=str(raw.get("reporter", "html")),
    )


def load_config(path: str | Path) -> ReportConfig:
    """Load a report configuration file.

    Raises:
        ConfigurationError: If the file is not valid YAML or not a mapping.
        OSError: If the file cannot be read.
    """
    config_path = Path(path)
    text = config_path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping at the top level")

    logger.debug("Loaded report configuration from %s", config_path)
    return parse_config(_resolve_dict(parsed))


def save_config(config: ReportConfig, path: str | Path) -> Path:
    """Write *config* as YAML, creating parent directories as needed."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        yaml.safe_dump(config.to_dict(), sort_keys=False, default_flow_style=False),
        encoding="utf-8",
    )
    logger.debug("Saved report configuration to %s", config_path)
    return config_path


def validate_config(config: ReportConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []

    if not config.output:
        errors.append("output is required")
    if config.reporter not in REPORTERS:
        errors.append(f"reporter must be one of: {', '.join(REPORTERS)} (got: {config.reporter})")
    if not config.inputs:
        errors.append("at least one input is required")

    for i, item in enumerate(config.inputs):
        if not item.path:
            errors.append(f"inputs[{i}].path is required")

    return errors
