"""Per-user default account settings."""

from src.preferences.models import DefaultSettings
from src.preferences.settings_store import JsonSettingsStore, SettingsStore

__all__ = ["DefaultSettings", "JsonSettingsStore", "SettingsStore"]
