"""Configuration module using Pydantic Settings.

Usage:
    from taskrunner.config import DispatcherSettings

    settings = DispatcherSettings(strict=False)
    dispatcher = Dispatcher.from_settings(settings)
"""

from taskrunner.config.settings import DispatcherSettings

__all__ = [
    "DispatcherSettings",
]
