"""Load, validate, and hot-reload the journey configuration.

The config lives in ``journey_config.yaml`` alongside this module, unless
``Settings.journey_config_path`` points elsewhere.  It is loaded once and
cached.  Call ``reload_journey_config()`` to re-read from disk after an
editorial update.

Usage::

    from src.journey.config_loader import get_journey_config

    config = get_journey_config()
    rule = config.rule("preparation_center")   # VisibilityRule(min_week=20, ...)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

import yaml

from src.journey.dates import MAX_WEEK, MIN_WEEK
from src.journey.gate import VisibilityRule

logger = logging.getLogger("nestling.journey.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "journey_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ContentRule:
    """One gated content block."""

    key: str
    title: str
    rule: VisibilityRule
    fallback: str | None = None


@dataclass(frozen=True)
class MilestoneDefinition:
    key: str
    title: str
    week: int


@dataclass
class JourneyConfig:
    """Complete, validated journey configuration.

    Attributes:
        version:    Config schema version string.
        content:    Content key → gated content block, in file order.
        milestones: Timeline milestones sorted by week.
    """

    version: str
    content: dict[str, ContentRule]
    milestones: list[MilestoneDefinition]

    def rule(self, key: str) -> VisibilityRule | None:
        entry = self.content.get(key)
        return entry.rule if entry else None

    @property
    def catalog(self) -> list[ContentRule]:
        return list(self.content.values())


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when journey_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Journey config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _check_week(value: object, where: str, errors: list[str]) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        errors.append(f"{where} must be an integer, got {value!r}")
        return None
    if not (MIN_WEEK <= value <= MAX_WEEK):
        errors.append(f"{where} = {value} is out of range [{MIN_WEEK}, {MAX_WEEK}]")
    return value


def _validate_and_build(raw: dict) -> JourneyConfig:
    """Validate the raw YAML dict and construct a JourneyConfig.

    Every problem is collected before raising, so one failed load reports
    all of them.

    Raises:
        ConfigValidationError: If required fields are missing or invalid.
    """
    errors: list[str] = []

    version = str(raw.get("version", "1.0"))

    # ── Content ──
    content_raw = raw.get("content") or {}
    if not isinstance(content_raw, dict):
        errors.append("'content' must be a mapping of key → content block")
        content_raw = {}

    content: dict[str, ContentRule] = {}
    for key, cfg in content_raw.items():
        where = f"content.{key}"
        if not isinstance(cfg, dict):
            errors.append(f"{where} must be a mapping")
            continue
        title = cfg.get("title")
        if not title:
            errors.append(f"Missing required key 'title' in section '{where}'")
            continue

        min_week = _check_week(cfg.get("min_week"), f"{where}.min_week", errors)
        max_week = _check_week(cfg.get("max_week"), f"{where}.max_week", errors)
        if min_week is not None and max_week is not None and min_week > max_week:
            errors.append(f"{where}: min_week {min_week} is after max_week {max_week}")

        stages = cfg.get("stages")
        if stages is not None and (
            not isinstance(stages, list) or not all(isinstance(s, str) for s in stages)
        ):
            errors.append(f"{where}.stages must be a list of stage names")
            stages = None

        content[key] = ContentRule(
            key=key,
            title=str(title),
            rule=VisibilityRule.from_dict(
                {"min_week": min_week, "max_week": max_week, "stages": stages}
            ),
            fallback=cfg.get("fallback"),
        )

    # ── Milestones ──
    milestones: list[MilestoneDefinition] = []
    seen: set[str] = set()
    for i, cfg in enumerate(raw.get("milestones") or []):
        where = f"milestones[{i}]"
        if not isinstance(cfg, dict):
            errors.append(f"{where} must be a mapping")
            continue
        missing = [k for k in ("key", "title", "week") if k not in cfg]
        if missing:
            errors.append(f"{where} is missing {', '.join(missing)}")
            continue
        if cfg["key"] in seen:
            errors.append(f"{where}: duplicate milestone key {cfg['key']!r}")
            continue
        week = _check_week(cfg["week"], f"{where}.week", errors)
        if week is None:
            continue
        seen.add(cfg["key"])
        milestones.append(
            MilestoneDefinition(key=str(cfg["key"]), title=str(cfg["title"]), week=week)
        )

    if errors:
        raise ConfigValidationError(
            f"journey_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return JourneyConfig(
        version=version,
        content=content,
        milestones=sorted(milestones, key=lambda m: m.week),
    )


def load_journey_config(path: Path | None = None) -> JourneyConfig:
    """Load and validate the journey config from disk.

    Args:
        path: Override path to YAML.  Uses ``Settings.journey_config_path``,
              then the bundled journey_config.yaml.
    """
    if path is None:
        from src.config import get_settings

        override = get_settings().journey_config_path
        path = Path(override) if override else _CONFIG_PATH
    raw = _load_yaml(path)
    config = _validate_and_build(raw)
    logger.info("Loaded journey config v%s from %s", config.version, path)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: JourneyConfig | None = None
_config_lock = threading.Lock()


def get_journey_config() -> JourneyConfig:
    """Return the global JourneyConfig singleton, loading it on first call."""
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_journey_config()
    return _config


def reload_journey_config(path: Path | None = None) -> JourneyConfig:
    """Reload the journey config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_journey_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded journey config: %s → %s", old_version, new_config.version)
    return new_config
