from .settings import TreeCertSettings, get_settings

__all__ = ["TreeCertSettings", "get_settings"]
