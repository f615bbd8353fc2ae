#!/usr/bin/env python3
"""Modular configuration system for the shipping console

Configuration hierarchy:
- backend_config: role backend endpoints and HTTP transport settings
- logging_config: Logging configuration
- console_config: top-level config combining the above
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .backend_config import BackendConfig
from .console_config import ConsoleConfig

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)

# Create global settings instance
settings = ConsoleConfig.from_env()

def get_settings() -> ConsoleConfig:
    """Get global settings instance"""
    return settings

def reload_settings() -> ConsoleConfig:
    """Reload settings from environment"""
    global settings
    settings = ConsoleConfig.from_env()
    return settings

__all__ = [
    # Main config
    'ConsoleConfig',
    'get_settings',
    'reload_settings',
    'settings',
    # Sub-configs
    'LoggingConfig',
    'BackendConfig',
]
