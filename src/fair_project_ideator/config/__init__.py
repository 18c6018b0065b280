from .settings import APP_ROOT, RuntimeSettings, Secrets, Settings, settings

__all__ = ["APP_ROOT", "RuntimeSettings", "Secrets", "Settings", "settings"]
