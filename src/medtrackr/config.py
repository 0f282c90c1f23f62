"""
MedTrackr Configuration

Loads config.yaml with environment overrides and falls back to defaults.

Example config.yaml::

    store_path: ~/.medtrackr/accounts.json
    smart_logic:
      terminal_level: Final Year
      surgical_rotation: Surgery
      study_plan_min_subjects: 5
"""

import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from medtrackr.onboarding.exceptions import ConfigError
from medtrackr.onboarding.logging_config import debug_enabled
from medtrackr.onboarding.smart_logic import SmartLogicConfig


def get_home() -> Path:
    """Get the MedTrackr base directory."""
    return Path(os.environ.get("MEDTRACKR_HOME", Path.home() / ".medtrackr")).expanduser()


def get_config_path() -> Path:
    """Get the config file path (MEDTRACKR_CONFIG overrides the default)."""
    override = os.environ.get("MEDTRACKR_CONFIG")
    if override:
        return Path(override).expanduser()
    return get_home() / "config.yaml"


@dataclass
class MedTrackrConfig:
    store_path: Path = field(default_factory=lambda: get_home() / "accounts.json")
    smart_logic: SmartLogicConfig = field(default_factory=SmartLogicConfig)
    debug: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "store_path": str(self.store_path),
            "smart_logic": asdict(self.smart_logic),
            "debug": self.debug,
        }


def _parse_smart_logic(raw: Any) -> SmartLogicConfig:
    if raw is None:
        return SmartLogicConfig()
    if not isinstance(raw, dict):
        raise ConfigError("smart_logic must be a mapping", config_key="smart_logic")

    known = {f.name for f in fields(SmartLogicConfig)}
    for key, value in raw.items():
        if key not in known:
            raise ConfigError(f"Unknown setting '{key}'", config_key=f"smart_logic.{key}")
        expected = int if key == "study_plan_min_subjects" else str
        if not isinstance(value, expected) or isinstance(value, bool):
            raise ConfigError(
                f"Setting '{key}' must be {expected.__name__}",
                config_key=f"smart_logic.{key}",
            )
    if raw.get("study_plan_min_subjects", 1) < 1:
        raise ConfigError(
            "study_plan_min_subjects must be at least 1",
            config_key="smart_logic.study_plan_min_subjects",
        )
    return SmartLogicConfig(**raw)


def load_config(path: Optional[Path] = None) -> MedTrackrConfig:
    """Load configuration from YAML.

    Args:
        path: Config file (default: MEDTRACKR_CONFIG or $MEDTRACKR_HOME/config.yaml)

    Returns:
        MedTrackrConfig; defaults when the file does not exist

    Raises:
        ConfigError: If the file cannot be parsed or has invalid settings
    """
    config_path = Path(path) if path else get_config_path()
    debug = debug_enabled()

    if not config_path.exists():
        return MedTrackrConfig(debug=debug)

    try:
        raw = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}", details=str(e)) from e
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}", details=str(e)) from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path} must contain a mapping")

    unknown = set(raw) - {"store_path", "smart_logic", "debug"}
    if unknown:
        key = sorted(unknown)[0]
        raise ConfigError(f"Unknown setting '{key}'", config_key=key)

    config = MedTrackrConfig(
        smart_logic=_parse_smart_logic(raw.get("smart_logic")),
        debug=bool(raw.get("debug", False)) or debug,
    )
    if raw.get("store_path"):
        config.store_path = Path(str(raw["store_path"])).expanduser()
    return config
