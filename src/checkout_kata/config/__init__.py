"""Configuration subpackage."""
from .settings import Settings, get_settings, normalize_items

__all__ = ['Settings', 'get_settings', 'normalize_items']
