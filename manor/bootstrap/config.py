"""
bootstrap/config.py - Application configuration v1.0

Provides configuration loading from files, environment variables, and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pathlib import Path
import os
import json
import logging

from ..site.engine import SiteAssessmentEngine, SitePolicy
from ..validation.engine import ValidationEngine
from ..validation.scoring import ScoringPolicy

logger = logging.getLogger("bootstrap.config")


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class ValidationConfig:
    """Module scoring and gate configuration."""

    base_score: int = 75
    threshold: int = 80
    penalty_unit: int = 5
    critical_units: int = 2
    warning_units: int = 1
    penalty_floor: int = 40
    max_modules_per_flag: int = 2
    assume_bridges_present: bool = False  # Count unknown bridge presence as present

    @classmethod
    def from_env(cls) -> "ValidationConfig":
        return cls(
            base_score=int(os.getenv("MANOR_BASE_SCORE", "75")),
            threshold=int(os.getenv("MANOR_THRESHOLD", "80")),
            penalty_unit=int(os.getenv("MANOR_PENALTY_UNIT", "5")),
            critical_units=int(os.getenv("MANOR_CRITICAL_UNITS", "2")),
            warning_units=int(os.getenv("MANOR_WARNING_UNITS", "1")),
            penalty_floor=int(os.getenv("MANOR_PENALTY_FLOOR", "40")),
            max_modules_per_flag=int(os.getenv("MANOR_MAX_MODULES_PER_FLAG", "2")),
            assume_bridges_present=_env_bool("MANOR_ASSUME_BRIDGES_PRESENT"),
        )

    def to_scoring_policy(self) -> ScoringPolicy:
        return ScoringPolicy(
            base_score=self.base_score,
            threshold=self.threshold,
            penalty_unit=self.penalty_unit,
            critical_units=self.critical_units,
            warning_units=self.warning_units,
            penalty_floor=self.penalty_floor,
            max_modules_per_flag=self.max_modules_per_flag,
        )

    def create_engine(self) -> ValidationEngine:
        return ValidationEngine(
            policy=self.to_scoring_policy(),
            assume_bridges_present=self.assume_bridges_present,
        )


@dataclass
class SiteConfig:
    """Site assessment band thresholds and override counts."""

    green_threshold: float = 4.0
    amber_threshold: float = 2.5
    red_category_override: int = 2
    amber_category_override: int = 3

    @classmethod
    def from_env(cls) -> "SiteConfig":
        return cls(
            green_threshold=float(os.getenv("MANOR_SITE_GREEN", "4.0")),
            amber_threshold=float(os.getenv("MANOR_SITE_AMBER", "2.5")),
            red_category_override=int(os.getenv("MANOR_SITE_RED_CATEGORIES", "2")),
            amber_category_override=int(os.getenv("MANOR_SITE_AMBER_CATEGORIES", "3")),
        )

    def to_site_policy(self) -> SitePolicy:
        return SitePolicy(
            green_threshold=self.green_threshold,
            amber_threshold=self.amber_threshold,
            red_category_override=self.red_category_override,
            amber_category_override=self.amber_category_override,
        )

    def create_engine(self) -> SiteAssessmentEngine:
        return SiteAssessmentEngine(self.to_site_policy())


@dataclass
class APIConfig:
    """API server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 4
    enable_docs: bool = True
    docs_url: str = "/docs"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "APIConfig":
        cors = os.getenv("MANOR_API_CORS_ORIGINS", "*")
        return cls(
            host=os.getenv("MANOR_API_HOST", "0.0.0.0"),
            port=int(os.getenv("MANOR_API_PORT", "8000")),
            workers=int(os.getenv("MANOR_API_WORKERS", "4")),
            enable_docs=_env_bool("MANOR_API_ENABLE_DOCS", "true"),
            docs_url=os.getenv("MANOR_API_DOCS_URL", "/docs"),
            cors_origins=cors.split(",") if cors else ["*"],
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("MANOR_LOG_LEVEL", "INFO"),
            format=os.getenv("MANOR_LOG_FORMAT",
                             "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv("MANOR_LOG_FILE"),
            json_logs=_env_bool("MANOR_JSON_LOGS"),
        )


_SECTIONS = ("validation", "site", "api", "logging")


@dataclass
class ManorConfig:
    """Root configuration for the MANOR advisor."""

    environment: str = "development"
    debug: bool = False
    version: str = "1.0.0"

    validation: ValidationConfig = field(default_factory=ValidationConfig)
    site: SiteConfig = field(default_factory=SiteConfig)
    api: APIConfig = field(default_factory=APIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Additional settings
    settings: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "ManorConfig":
        """Create configuration from environment variables."""
        return cls(
            environment=os.getenv("MANOR_ENVIRONMENT", "development"),
            debug=_env_bool("MANOR_DEBUG"),
            validation=ValidationConfig.from_env(),
            site=SiteConfig.from_env(),
            api=APIConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "ManorConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            data = json.load(f)

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "ManorConfig":
        """Create config from dictionary, environment first then file values."""
        config = cls.from_env()

        if "environment" in data:
            config.environment = data["environment"]
        if "debug" in data:
            config.debug = data["debug"]

        for name in _SECTIONS:
            section = getattr(config, name)
            for key, value in data.get(name, {}).items():
                if hasattr(section, key):
                    setattr(section, key, value)
                else:
                    logger.warning(f"Ignoring unknown config key: {name}.{key}")

        if "settings" in data:
            config.settings.update(data["settings"])

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "version": self.version,
            "validation": {
                "base_score": self.validation.base_score,
                "threshold": self.validation.threshold,
                "penalty_unit": self.validation.penalty_unit,
                "penalty_floor": self.validation.penalty_floor,
                "assume_bridges_present": self.validation.assume_bridges_present,
            },
            "site": {
                "green_threshold": self.site.green_threshold,
                "amber_threshold": self.site.amber_threshold,
            },
            "api": {
                "host": self.api.host,
                "port": self.api.port,
                "workers": self.api.workers,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
        }


# Global config instance
_config: Optional[ManorConfig] = None


def load_config(filepath: str = None) -> ManorConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        ManorConfig instance
    """
    global _config

    if filepath:
        _config = ManorConfig.from_file(filepath)
    else:
        default_paths = [
            "./manor.json",
            "./config/manor.json",
            os.path.expanduser("~/.manor/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                _config = ManorConfig.from_file(path)
                return _config

        _config = ManorConfig.from_env()

    logger.info(f"Configuration loaded: environment={_config.environment}")
    return _config


def get_config() -> ManorConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
