"""Core module pour gridcms."""
from .i18n import LocalizedTextService, i18n_resolve, resolve_placeholders, reload_cache

__all__ = [
    "LocalizedTextService",
    "i18n_resolve",
    "resolve_placeholders",
    "reload_cache",
]
