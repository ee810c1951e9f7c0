"""Settings and telemetry shared by every editor service."""

from .config import EditorSettings, LogSettings

__all__ = ["EditorSettings", "LogSettings"]
