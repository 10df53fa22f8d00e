"""Settings — block alignment and CI policy from YAML, environment and CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .alignment import MEMORY_HOTPLUG_BLOCK_ALIGNMENT_BYTES
from .exceptions import ConfigError, QuantityError
from .quantity import Quantity
from .rules.registry import RULE_INFO

DEFAULT_CONFIG_FILE = ".memhotplug.yaml"
ENV_BLOCK_ALIGNMENT = "MEMHOTPLUG_BLOCK_ALIGNMENT"


@dataclass
class Settings:
    block_alignment: int = MEMORY_HOTPLUG_BLOCK_ALIGNMENT_BYTES
    # Rule IDs that fail --ci; empty means any violation fails.
    fail_on: list[str] = field(default_factory=list)

    def should_fail(self, rule_ids: list[str]) -> bool:
        if not self.fail_on:
            return bool(rule_ids)
        return any(r in self.fail_on for r in rule_ids)


def parse_alignment(raw: Any) -> int:
    """Block alignment from "2Mi" / 2097152; must be a positive whole byte count."""
    try:
        q = Quantity.parse(raw)
    except QuantityError as e:
        raise ConfigError(f"Invalid block alignment: {e}") from e
    if q.amount != q.value() or q.value() <= 0:
        raise ConfigError(f"Block alignment must be a positive number of bytes, got {raw!r}")
    return q.value()


def _parse_fail_on(raw: Any) -> list[str]:
    if raw is None or raw == "any":
        return []
    if isinstance(raw, str):
        raw = [r.strip() for r in raw.split(",") if r.strip()]
    if not isinstance(raw, list):
        raise ConfigError(f"fail_on must be 'any' or a list of rule IDs, got {raw!r}")
    unknown = [r for r in raw if r not in RULE_INFO]
    if unknown:
        raise ConfigError(f"Unknown rule(s) in fail_on: {', '.join(map(str, unknown))}")
    return list(raw)


def _load_file(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot load config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping")
    return data


def load_settings(
    config_path: Path | None = None,
    block_alignment: str | None = None,
    env: dict[str, str] | None = None,
) -> Settings:
    """Defaults < config file < MEMHOTPLUG_BLOCK_ALIGNMENT < explicit argument."""
    env = os.environ if env is None else env
    settings = Settings()

    path = config_path
    if path is None and Path(DEFAULT_CONFIG_FILE).exists():
        path = Path(DEFAULT_CONFIG_FILE)
    if path is not None:
        data = _load_file(path)
        if "block_alignment" in data:
            settings.block_alignment = parse_alignment(data["block_alignment"])
        settings.fail_on = _parse_fail_on(data.get("fail_on"))

    if env.get(ENV_BLOCK_ALIGNMENT):
        settings.block_alignment = parse_alignment(env[ENV_BLOCK_ALIGNMENT])
    if block_alignment is not None:
        settings.block_alignment = parse_alignment(block_alignment)
    return settings
