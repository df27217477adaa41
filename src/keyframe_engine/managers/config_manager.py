"""
Config Manager

Loads the engine configuration from YAML: the packaged defaults
(config/engine.yaml) with an optional user file merged on top.
Falls back to built-in defaults when the files cannot be read.
"""

import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from keyframe_engine.models.easing import CubicBezierEasing, Easing, parse_easing
from keyframe_engine.models.enums import LogCategory, LogLevel
from keyframe_engine.services.composer import TimelineComposer
from keyframe_engine.services.playback_service import PlaybackService
from keyframe_engine.services.validator import AnimationVerifier
from keyframe_engine.utils.enum_helper import EnumHelper
from keyframe_engine.utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.CONFIG)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "engine.yaml"

BUILTIN_DEFAULTS: Dict[str, Any] = {
    "logging": {"level": "INFO", "colors": True},
    "validation": {"strict_consistency": False},
    "easing": {"bezier_max_iterations": 16, "bezier_tolerance": 1e-7},
    "playback": {"fps": 60},
}


@dataclass(frozen=True)
class EngineConfig:
    """Typed view of the merged YAML configuration"""
    log_level: LogLevel = LogLevel.INFO
    log_colors: bool = True
    strict_consistency: bool = False
    bezier_max_iterations: int = 16
    bezier_tolerance: float = 1e-7
    fps: int = 60

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        logging_cfg = data.get("logging", {})
        validation_cfg = data.get("validation", {})
        easing_cfg = data.get("easing", {})
        playback_cfg = data.get("playback", {})

        return cls(
            log_level=EnumHelper.from_string(LogLevel, str(logging_cfg.get("level", "INFO"))),
            log_colors=bool(logging_cfg.get("colors", True)),
            strict_consistency=bool(validation_cfg.get("strict_consistency", False)),
            bezier_max_iterations=int(easing_cfg.get("bezier_max_iterations", 16)),
            bezier_tolerance=float(easing_cfg.get("bezier_tolerance", 1e-7)),
            fps=int(playback_cfg.get("fps", 60)),
        )


class ConfigManager:
    """
    Engine configuration manager

    Example:
        config = ConfigManager("my_engine.yaml")
        config.load()
        config.apply()          # configure logger

        composer = config.create_composer()
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None,
                 defaults_path: Union[str, Path] = DEFAULT_CONFIG_PATH):
        """
        Args:
            config_path: Optional user YAML merged over the defaults
            defaults_path: Packaged defaults file
        """
        self.config_path = Path(config_path) if config_path else None
        self.defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.config = EngineConfig()

    def load(self) -> EngineConfig:
        """
        Load and merge configuration files

        Process:
        1. Load packaged defaults (built-in dict if unreadable)
        2. Merge the user file section by section, if given
        3. Parse into EngineConfig (built-in defaults on invalid values)
        """
        data = self._copy(BUILTIN_DEFAULTS)

        try:
            data = self._merge(data, self._read(self.defaults_path))
        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load default config", path=str(self.defaults_path),
                      error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to built-in defaults")

        if self.config_path is not None:
            try:
                data = self._merge(data, self._read(self.config_path))
                log.info(f"Loaded {self.config_path.name}")
            except (OSError, yaml.YAMLError) as ex:
                log.error("Failed to load config", path=str(self.config_path),
                          error=str(ex), error_type=type(ex).__name__)
                log.warn("Using default configuration")

        try:
            config = EngineConfig.from_dict(data)
        except (AttributeError, TypeError, ValueError) as ex:
            log.error("Invalid configuration values", error=str(ex))
            log.warn("Falling back to built-in defaults")
            data = self._copy(BUILTIN_DEFAULTS)
            config = EngineConfig.from_dict(data)

        self.data = data
        self.config = config
        return config

    def apply(self):
        """Push logging configuration into the logger"""
        configure_logger(min_level=self.config.log_level, use_colors=self.config.log_colors)
        log.debug("Configuration applied",
                  log_level=self.config.log_level.name,
                  strict=self.config.strict_consistency)

    def parse_easing(self, value: Any) -> Optional[Easing]:
        """
        parse_easing() with the configured bezier solver limits.

        Returns None for invalid input, like parse_easing().
        """
        easing = parse_easing(value)
        if isinstance(easing, CubicBezierEasing):
            easing = easing.with_solver(self.config.bezier_max_iterations,
                                        self.config.bezier_tolerance)
        return easing

    # ------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------

    def create_composer(self) -> TimelineComposer:
        return TimelineComposer(strict=self.config.strict_consistency)

    def create_verifier(self) -> AnimationVerifier:
        return AnimationVerifier(strict=self.config.strict_consistency)

    def create_playback_service(self) -> PlaybackService:
        return PlaybackService(fps=self.config.fps)

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise yaml.YAMLError(f"{path.name}: top level must be a mapping")
        return loaded

    @staticmethod
    def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        merged = ConfigManager._copy(base)
        for section, values in override.items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(values)
            else:
                merged[section] = values
        return merged

    @staticmethod
    def _copy(data: Dict[str, Any]) -> Dict[str, Any]:
        return {k: dict(v) if isinstance(v, dict) else v for k, v in data.items()}
