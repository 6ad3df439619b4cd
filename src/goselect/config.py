"""XDG config loading/saving."""

from __future__ import annotations

import sys
from contextlib import suppress
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, ConfigDict, Field, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

DEFAULT_CONFIG_PATH = Path("~/.config/goselect/config.toml").expanduser()
DEFAULT_MAX_DEPTH = 0
MAX_DEPTH_LIMIT = 8
DEFAULT_PAGE_SIZE = 8
PAGE_SIZE_LIMIT = 50
DEFAULT_MARKERS: tuple[str, ...] = ("go-build-zos", "IBM_README.txt", "bin/go")
DEFAULT_VERSION_FILE = "VERSION"


def _is_relative_name(value: str) -> bool:
    if not value or "\\" in value:
        return False
    pure = PurePosixPath(value)
    return not pure.is_absolute() and ".." not in pure.parts


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=0, le=MAX_DEPTH_LIMIT)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=PAGE_SIZE_LIMIT)
    markers: list[str] = Field(default_factory=lambda: list(DEFAULT_MARKERS))
    version_file: str = DEFAULT_VERSION_FILE

    @field_validator("markers")
    @classmethod
    def _validate_markers(cls, value: list[str]) -> list[str]:
        cleaned = [item.strip() for item in value if item.strip()]
        if not cleaned:
            raise ValueError("At least one installation marker is required")
        for item in cleaned:
            if not _is_relative_name(item):
                raise ValueError(f"Invalid installation marker: {item}")
        return cleaned

    @field_validator("version_file")
    @classmethod
    def _validate_version_file(cls, value: str) -> str:
        stripped = value.strip()
        if not _is_relative_name(stripped):
            raise ValueError(f"Invalid version file: {value}")
        return stripped


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _toml_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return f'"{_escape(value)}"'
    if isinstance(value, list):
        return "[" + ", ".join(_toml_scalar(item) for item in value) + "]"
    raise TypeError(f"Unsupported TOML scalar type: {type(value)!r}")


def _normalize_markers(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    normalized: list[str] = []
    seen: set[str] = set()
    for item in value:
        if not isinstance(item, str):
            continue
        marker = item.strip()
        if not _is_relative_name(marker) or marker in seen:
            continue
        seen.add(marker)
        normalized.append(marker)
    return normalized


def _sanitize(raw: dict[str, object]) -> AppConfig:
    cfg = AppConfig()

    max_depth = raw.get("max_depth", cfg.max_depth)
    if isinstance(max_depth, int) and not isinstance(max_depth, bool):
        if 0 <= max_depth <= MAX_DEPTH_LIMIT:
            cfg.max_depth = max_depth

    page_size = raw.get("page_size", cfg.page_size)
    if isinstance(page_size, int) and not isinstance(page_size, bool):
        if 1 <= page_size <= PAGE_SIZE_LIMIT:
            cfg.page_size = page_size

    markers = _normalize_markers(raw.get("markers", cfg.markers))
    if markers:
        cfg.markers = markers

    version_file = raw.get("version_file", cfg.version_file)
    if isinstance(version_file, str) and _is_relative_name(version_file.strip()):
        cfg.version_file = version_file.strip()

    return cfg


def load_config(path: str | Path | None = None) -> AppConfig:
    resolved = get_config_path(path)
    if not resolved.exists():
        return AppConfig()
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()
    return _sanitize(raw)


def save_config(config: AppConfig, path: str | Path | None = None) -> Path:
    resolved = get_config_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)
    lines = [
        f"max_depth = {_toml_scalar(config.max_depth)}",
        f"page_size = {_toml_scalar(config.page_size)}",
        f"markers = {_toml_scalar(list(config.markers))}",
        f"version_file = {_toml_scalar(config.version_file)}",
    ]
    resolved.write_text("\n".join(lines) + "\n", encoding="utf-8")
    with suppress(OSError):
        resolved.chmod(0o644)
    return resolved
