"""
bootstrap/ - Bootstrap Layer

Provides configuration loading, logging setup, and the CLI and API
entry points.
"""

from .config import (
    ManorConfig,
    ValidationConfig,
    SiteConfig,
    APIConfig,
    LoggingConfig,
    load_config,
    get_config,
)

from .entrypoints import (
    cli_main,
    api_main,
    run_api,
    setup_logging,
)


__all__ = [
    # Config
    "ManorConfig",
    "ValidationConfig",
    "SiteConfig",
    "APIConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    # Entry Points
    "cli_main",
    "api_main",
    "run_api",
    "setup_logging",
]
