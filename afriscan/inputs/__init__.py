from .settings import DEFAULT_SOURCES, Settings, SettingsLoader, StoreBackend, load_settings

__all__ = ["DEFAULT_SOURCES", "Settings", "SettingsLoader", "StoreBackend", "load_settings"]
