"""
GRIDCMS — validation block grid + journal d'audit.

Usage:
    >>> from gridcms import BlockGridPropertyValueEditor, BlockGridConfiguration
    >>> config = BlockGridConfiguration(validationLimit={"min": 1, "max": 5})
    >>> BlockGridPropertyValueEditor().validate(raw_json, config)
"""
from .blockgrid import (
    BlockGridConfiguration,
    BlockGridMinMaxValidator,
    BlockGridPropertyValueEditor,
    BlockEditorValues,
    ValidationFailure,
)
from .core.i18n import LocalizedTextService

__version__ = "1.0.0"

__all__ = [
    "BlockGridConfiguration",
    "BlockGridMinMaxValidator",
    "BlockGridPropertyValueEditor",
    "BlockEditorValues",
    "ValidationFailure",
    "LocalizedTextService",
]
