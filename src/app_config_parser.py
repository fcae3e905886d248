"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    DropSettings,
    RuntimeSettings,
    SessionSettings,
    UIServerSettings,
)


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    session = _parse_session_settings(_section(raw, "session"))
    drops = _parse_drop_settings(_section(raw, "drops"))
    runtime = _parse_runtime_settings(_section(raw, "runtime"))
    ui_server = _parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir)

    return AppConfig(
        session=session,
        drops=drops,
        runtime=runtime,
        ui_server=ui_server,
        source_file=source_file,
    )


def _parse_session_settings(section: Mapping[str, Any]) -> SessionSettings:
    return SessionSettings(
        work_minutes=_as_positive_float(
            section.get("work_minutes", 25.0),
            "session.work_minutes",
        ),
        rest_minutes=_as_positive_float(
            section.get("rest_minutes", 5.0),
            "session.rest_minutes",
        ),
    )


def _parse_drop_settings(section: Mapping[str, Any]) -> DropSettings:
    return DropSettings(
        count=_as_int(section.get("count", 20), "drops.count"),
        low_water_ratio=_as_float(
            section.get("low_water_ratio", 1.0),
            "drops.low_water_ratio",
        ),
        min_fall_speed=_as_float(
            section.get("min_fall_speed", 100.0),
            "drops.min_fall_speed",
        ),
        max_fall_speed=_as_float(
            section.get("max_fall_speed", 250.0),
            "drops.max_fall_speed",
        ),
        max_drift=_as_float(section.get("max_drift", 15.0), "drops.max_drift"),
        gravity=_as_float(section.get("gravity", 60.0), "drops.gravity"),
        terminal_velocity=(
            _as_float(section.get("terminal_velocity"), "drops.terminal_velocity")
            if "terminal_velocity" in section
            else None
        ),
        max_spin=_as_float(section.get("max_spin", 90.0), "drops.max_spin"),
        margin=_as_float(section.get("margin", 50.0), "drops.margin"),
        symbols=_as_str_tuple(section.get("symbols", ()), "drops.symbols"),
        viewport_width=_as_positive_float(
            section.get("viewport_width", 1920.0),
            "drops.viewport_width",
        ),
        viewport_height=_as_positive_float(
            section.get("viewport_height", 1080.0),
            "drops.viewport_height",
        ),
    )


def _parse_runtime_settings(section: Mapping[str, Any]) -> RuntimeSettings:
    return RuntimeSettings(
        rest_frame_seconds=_as_positive_float(
            section.get("rest_frame_seconds", 0.016),
            "runtime.rest_frame_seconds",
        ),
        work_frame_seconds=_as_positive_float(
            section.get("work_frame_seconds", 0.1),
            "runtime.work_frame_seconds",
        ),
        paused_frame_seconds=_as_positive_float(
            section.get("paused_frame_seconds", 0.05),
            "runtime.paused_frame_seconds",
        ),
        auto_start=_as_bool(section.get("auto_start", False), "runtime.auto_start"),
    )


def _parse_ui_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    index_file = _as_str(section.get("index_file", ""), "ui_server.index_file")
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", False), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        index_file=_resolve_path(base_dir, index_file) if index_file else "",
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_optional_str(value: Any, field: str) -> Optional[str]:
    text = _as_str(value, field)
    if not text:
        return None
    return text


def _as_str_tuple(value: Any, field: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise AppConfigurationError(f"{field} must be a list of strings.")
    items = tuple(_as_optional_str(item, field) for item in value)
    return tuple(item for item in items if item)


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    raise AppConfigurationError(f"{field} must be a float.")


def _as_positive_float(value: Any, field: str) -> float:
    number = _as_float(value, field)
    if number <= 0:
        raise AppConfigurationError(f"{field} must be greater than zero.")
    return number


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
