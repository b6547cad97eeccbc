"""Comparison configuration and its JSON config loader."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import json
import os
from pathlib import Path
from typing import Any

from orgdiffpack.core.types import ITEM_FORMATS

COMPARE_CONFIG_VERSION = 1
COMPARE_CONFIG_ENV_VAR = "ORGDIFF_COMPARE_CONFIG"
DEFAULT_STRUCTURAL_FORMATS = frozenset({"xml", "json"})

_SUPPORTED_KEYS = frozenset(
    {
        "config_version",
        "structural_formats",
        "canonicalize",
        "format_overrides",
        "exclude_patterns",
        "max_workers",
    }
)


class CompareConfigError(ValueError):
    """Raised when comparison config is malformed."""


@dataclass(slots=True)
class CompareConfig:
    """Settings that control how two snapshots are collected and compared."""

    structural_formats: frozenset[str] = DEFAULT_STRUCTURAL_FORMATS
    canonicalize: bool = True
    format_overrides: dict[str, str] = field(default_factory=dict)
    exclude_patterns: tuple[str, ...] = field(default_factory=tuple)
    max_workers: int = 1

    def __post_init__(self) -> None:
        self.structural_formats = frozenset(self.structural_formats)
        unsupported = sorted(self.structural_formats - {"xml", "json"})
        if unsupported:
            raise CompareConfigError(
                f"Unsupported structural format(s): {', '.join(unsupported)}"
            )

        overrides: dict[str, str] = {}
        for extension, item_format in self.format_overrides.items():
            normalized_extension = _normalize_extension(extension)
            if item_format not in ITEM_FORMATS:
                raise CompareConfigError(
                    f"Unsupported format override for {normalized_extension}: {item_format}"
                )
            overrides[normalized_extension] = item_format
        self.format_overrides = overrides

        self.exclude_patterns = tuple(
            pattern.strip() for pattern in self.exclude_patterns if pattern.strip()
        )

        if isinstance(self.max_workers, bool) or not isinstance(self.max_workers, int):
            raise CompareConfigError("max_workers must be an integer")
        if self.max_workers < 1:
            raise CompareConfigError("max_workers must be >= 1")

    def is_structural(self, item_format: str) -> bool:
        return self.canonicalize and item_format in self.structural_formats

    def to_dict(self) -> dict[str, Any]:
        return {
            "config_version": COMPARE_CONFIG_VERSION,
            "structural_formats": sorted(self.structural_formats),
            "canonicalize": self.canonicalize,
            "format_overrides": dict(sorted(self.format_overrides.items())),
            "exclude_patterns": list(self.exclude_patterns),
            "max_workers": self.max_workers,
        }


def compare_config_from_dict(raw: Mapping[str, Any]) -> CompareConfig:
    """Build a validated config from a decoded JSON object."""
    unknown = sorted(set(raw.keys()) - _SUPPORTED_KEYS)
    if unknown:
        raise CompareConfigError(f"Compare config contains unsupported keys: {', '.join(unknown)}")

    version = raw.get("config_version", COMPARE_CONFIG_VERSION)
    if version != COMPARE_CONFIG_VERSION:
        raise CompareConfigError(
            "Unsupported compare config version "
            f"{version!r}; expected {COMPARE_CONFIG_VERSION}."
        )

    canonicalize = raw.get("canonicalize", True)
    if not isinstance(canonicalize, bool):
        raise CompareConfigError("Compare config key 'canonicalize' must be boolean.")

    overrides = raw.get("format_overrides", {})
    if not isinstance(overrides, dict):
        raise CompareConfigError("Compare config key 'format_overrides' must be a JSON object.")

    return CompareConfig(
        structural_formats=frozenset(
            _read_string_list(raw, key="structural_formats", default=sorted(DEFAULT_STRUCTURAL_FORMATS))
        ),
        canonicalize=canonicalize,
        format_overrides={str(key): str(value) for key, value in overrides.items()},
        exclude_patterns=tuple(_read_string_list(raw, key="exclude_patterns", default=[])),
        max_workers=raw.get("max_workers", 1),
    )


def load_compare_config_from_file(path: str | Path) -> CompareConfig:
    """Load comparison config from a JSON file."""
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except json.JSONDecodeError as error:
        raise CompareConfigError(
            f"Invalid compare config JSON ({config_path}): {error}"
        ) from error

    if not isinstance(raw, dict):
        raise CompareConfigError(f"Compare config must be a JSON object ({config_path}).")

    return compare_config_from_dict(raw)


def _read_string_list(raw: Mapping[str, Any], *, key: str, default: list[str]) -> list[str]:
    value = raw.get(key, default)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise CompareConfigError(f"Compare config key '{key}' must be a list of strings.")
    return list(value)


def _normalize_extension(extension: str) -> str:
    normalized = extension.strip().lower()
    if not normalized:
        raise CompareConfigError("Format override extension must be non-empty")
    return normalized if normalized.startswith(".") else f".{normalized}"


def resolve_compare_config(path: str | Path | None = None) -> CompareConfig:
    """Resolve config from an explicit path, then ``ORGDIFF_COMPARE_CONFIG``, then defaults."""
    if path is not None:
        return load_compare_config_from_file(path)
    env_path = os.getenv(COMPARE_CONFIG_ENV_VAR, "").strip()
    if env_path:
        return load_compare_config_from_file(env_path)
    return CompareConfig()
