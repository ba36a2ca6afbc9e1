from app.utils.config.env import Settings, get_settings

__all__ = ["Settings", "get_settings"]
