"""Configuration module for TaskHub.

Available Configurations:
- AppConfig: API process settings loaded from the environment
"""

from taskhub.config.app_config import TEST_APP_CONFIG, AppConfig

__all__ = [
    "AppConfig",
    "TEST_APP_CONFIG",
]
