"""Application settings and configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

HOME_ENV_VAR = "DESIMEAL_HOME"


def _default_config_dir() -> Path:
    """Return the configuration directory ($DESIMEAL_HOME or ~/.desimeal)."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".desimeal"


def _default_profile_path() -> Path:
    return _default_config_dir() / "profile.yaml"


def _default_plan_path() -> Path:
    return _default_config_dir() / "plan.json"


@dataclass
class CatalogConfig:
    """Catalog file locations. None means the bundled catalog."""

    meals_path: Optional[Path] = None
    outside_foods_path: Optional[Path] = None


@dataclass
class StateConfig:
    """Where the CLI keeps the user's profile and current plan."""

    profile_path: Path = field(default_factory=_default_profile_path)
    plan_path: Path = field(default_factory=_default_plan_path)


@dataclass
class PlannerConfig:
    """Planner configuration."""

    seed: Optional[int] = None  # None for a different plan every run


@dataclass
class DefaultsConfig:
    """Default values for various operations."""

    output_format: str = "table"  # "table" or "json"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"


def _optional_path(value: Optional[str]) -> Optional[Path]:
    return Path(value).expanduser() if value else None


@dataclass
class Settings:
    """Main application settings."""

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    state: StateConfig = field(default_factory=StateConfig)
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses <home>/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        if "catalog" in data:
            cat_data = data["catalog"] or {}
            if "meals_path" in cat_data:
                settings.catalog.meals_path = _optional_path(cat_data["meals_path"])
            if "outside_foods_path" in cat_data:
                settings.catalog.outside_foods_path = _optional_path(
                    cat_data["outside_foods_path"]
                )

        if "state" in data:
            state_data = data["state"] or {}
            if state_data.get("profile_path"):
                settings.state.profile_path = Path(state_data["profile_path"]).expanduser()
            if state_data.get("plan_path"):
                settings.state.plan_path = Path(state_data["plan_path"]).expanduser()

        if "planner" in data:
            planner_data = data["planner"] or {}
            if planner_data.get("seed") is not None:
                settings.planner.seed = int(planner_data["seed"])

        if "defaults" in data:
            def_data = data["defaults"] or {}
            if "output_format" in def_data:
                settings.defaults.output_format = def_data["output_format"]

        if "logging" in data:
            log_data = data["logging"] or {}
            if "level" in log_data:
                settings.logging.level = str(log_data["level"]).upper()

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses <home>/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "catalog": {
                "meals_path": str(self.catalog.meals_path) if self.catalog.meals_path else None,
                "outside_foods_path": (
                    str(self.catalog.outside_foods_path)
                    if self.catalog.outside_foods_path
                    else None
                ),
            },
            "state": {
                "profile_path": str(self.state.profile_path),
                "plan_path": str(self.state.plan_path),
            },
            "planner": {
                "seed": self.planner.seed,
            },
            "defaults": {
                "output_format": self.defaults.output_format,
            },
            "logging": {
                "level": self.logging.level,
            },
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load()
    return _settings
