"""Prepper-backed settings for Sensitive Replace.

Settings are layered, later layers winning: discovered YAML files, a `.env`
file in the working directory, then the process environment. Only the keys
declared on `SensitiveReplaceConfig` are picked up from the environment, and
every key has a default, so running without any source is fine.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterator, Mapping, Tuple

from dotenv import dotenv_values
from prepper import (
    Field,
    IoError,
    SchemaError,
    SchemaModel,
    ValidationError,
    model_validator,
)
from prepper.loaders import _parse_file, _path_to_source, discover_file_paths
from prepper.merge import merge_layer
from prepper.provenance import ProvenanceRecorder

from .errors import ConfigurationError

APP_NAME = "SensitiveReplace"
DEFAULT_PLACEHOLDER = 'Replace (e.g.: "hello world")'

Layer = Tuple[str, str, Mapping[str, Any]]


class SensitiveReplaceConfig(SchemaModel):
    """Schema describing all supported configuration options."""

    SENSITIVE_REPLACE_PLACEHOLDER: str = Field(
        default=DEFAULT_PLACEHOLDER,
        description="Prompt shown when asking for the replacement text.",
    )
    SENSITIVE_REPLACE_VERBOSE: bool = Field(
        default=False,
        description="Report every selection as if --verbose was given.",
    )
    SENSITIVE_REPLACE_ENCODING: str = Field(
        default="utf-8",
        description="Encoding used to read and write documents.",
    )

    @model_validator(mode="before")
    def _normalise_encoding(data: Any) -> Any:
        if isinstance(data, dict):
            raw_value = data.get("SENSITIVE_REPLACE_ENCODING")
            if isinstance(raw_value, str):
                normalized = raw_value.strip().lower().replace("_", "-")
                data["SENSITIVE_REPLACE_ENCODING"] = normalized or "utf-8"
        return data


def _settings_layers(app_dir: Path) -> Iterator[Layer]:
    """Yield `(source, layer, values)` for every settings source, lowest first."""

    for path, label in discover_file_paths(
        APP_NAME, "yaml", app_dir=app_dir, extra_paths=None
    ):
        parsed = _parse_file(path, "yaml")
        if not isinstance(parsed, Mapping):
            raise IoError(f"{path}: expected a mapping at the root.")
        yield _path_to_source(label, "yaml", path), "file", parsed

    keys = set(SensitiveReplaceConfig.__field_infos__.keys())

    dotenv_path = app_dir / ".env"
    if dotenv_path.exists():
        values = dotenv_values(dotenv_path)
        yield "env:.env", "env", {
            key: value for key, value in values.items() if key in keys and value is not None
        }

    yield "env:process", "env", {
        key: value for key, value in os.environ.items() if key in keys
    }


def _describe_validation_error(exc: ValidationError) -> str:
    lines = []
    for entry in exc.to_dict():
        path = entry.get("path") or []
        location = ".".join(str(part) for part in path) if isinstance(path, (list, tuple)) else str(path)
        message = entry.get("message") or entry.get("msg") or "Invalid value"
        lines.append(f"- {location}: {message}" if location else f"- {message}")
    return "Invalid settings:\n" + "\n".join(lines)


@lru_cache(maxsize=1)
def get_settings(app_dir: Path | None = None) -> SensitiveReplaceConfig:
    """Return the validated settings, loading them on first use."""

    provenance = ProvenanceRecorder()
    combined: dict[str, Any] = {}
    try:
        for source, layer, values in _settings_layers(app_dir or Path.cwd()):
            if values:
                merge_layer(
                    combined, dict(values), provenance=provenance, source=source, layer=layer
                )
        return SensitiveReplaceConfig.validate(combined, provenance=provenance)
    except IoError as exc:
        raise ConfigurationError(f"Settings files could not be read: {exc}") from exc
    except SchemaError as exc:
        raise ConfigurationError(f"Settings schema error: {exc}") from exc
    except ValidationError as exc:
        raise ConfigurationError(_describe_validation_error(exc)) from exc
