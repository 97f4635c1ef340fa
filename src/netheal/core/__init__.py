"""Core module

Settings and logging shared by the client, stores and CLI.
"""

from netheal.core.settings import Settings, get_settings, load_auth_token

__all__ = ["Settings", "get_settings", "load_auth_token"]
