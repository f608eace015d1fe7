"""
Configuration loading utilities.

Project configs are YAML files layered over a shared base.yaml found
next to them. String values may reference environment variables as
${VAR} or ${VAR:default}. A minimal project config only needs
``project`` and ``data.source``.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from layoffs_cleaning.config.settings import (
    CleaningConfig,
    DataPathsConfig,
    FillPolicy,
    IndustryConfig,
    LoggingConfig,
    NormalizationConfig,
)

BASE_CONFIG_NAME = "base.yaml"

_ENV_VAR = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<default>[^}]*))?\}")


def _expand_env(value: str) -> str:
    """Replace ${VAR} references; unset variables without default become ''."""
    return _ENV_VAR.sub(
        lambda m: os.environ.get(m["name"], m["default"] or ""),
        value,
    )


def _expand_tree(node: Any) -> Any:
    """Apply env expansion to every string in a parsed YAML tree."""
    if isinstance(node, str):
        return _expand_env(node)
    if isinstance(node, dict):
        return {key: _expand_tree(item) for key, item in node.items()}
    if isinstance(node, list):
        return [_expand_tree(item) for item in node]
    return node


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into base; nested sections merge, everything else replaces."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping with env references expanded; empty files give {}."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return _expand_tree(data) if data else {}


def _find_base(config_path: Path) -> Path | None:
    """Return the base.yaml next to config_path, unless it is config_path."""
    candidate = config_path.parent / BASE_CONFIG_NAME
    if candidate.exists() and candidate.resolve() != config_path.resolve():
        return candidate
    return None


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> CleaningConfig:
    """
    Load cleaning configuration from YAML file(s).

    Minimal config requires only:
        - project: str
        - data.source: path to the raw layoffs CSV

    Args:
        config_path: Path to the main configuration file.
        base_path: Base configuration to layer under config_path.
            Defaults to a base.yaml in the same directory.

    Returns:
        Fully validated CleaningConfig instance.
    """
    base_path = base_path or _find_base(config_path)
    base_data = load_yaml(base_path) if base_path else {}
    merged = _deep_merge(base_data, load_yaml(config_path))

    project = merged.get("project")
    if not project:
        msg = "Config must specify 'project' name"
        raise ValueError(msg)

    data_data = merged.get("data", {})
    source = data_data.get("source")
    if not source:
        msg = "Config must specify 'data.source'"
        raise ValueError(msg)

    data_paths = DataPathsConfig(
        data_root=Path(data_data.get("root", "./data")),
        source=Path(source),
        output=Path(data_data["output"]) if data_data.get("output") else None,
    )

    industry_data = merged.get("industry", {})
    industry = IndustryConfig(
        synonyms={
            str(canonical): [str(v) for v in (variants or [])]
            for canonical, variants in industry_data.get("synonyms", {}).items()
        },
        fill_policy=FillPolicy(industry_data.get("fill_policy", "smallest")),
    )

    norm_data = merged.get("normalization", {})
    normalization = NormalizationConfig(**norm_data)

    logging_data = merged.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        json_output=logging_data.get("json_output", False),
    )

    return CleaningConfig(
        project=project,
        data_paths=data_paths,
        industry=industry,
        normalization=normalization,
        logging=logging_config,
    )
