#!/usr/bin/env python3
"""Shipping console main configuration

Combines the logging and backend sub-configs.
"""
import os
from dataclasses import dataclass, field

from .backend_config import BackendConfig
from .logging_config import LoggingConfig


@dataclass
class ConsoleConfig:
    """Top-level console configuration"""
    environment: str = "development"
    debug: bool = False

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls) -> 'ConsoleConfig':
        """Load full configuration from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            environment=env,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            logging=LoggingConfig.from_env(),
            backend=BackendConfig.from_env(),
        )
