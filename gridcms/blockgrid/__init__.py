"""
Block grid — schémas, désérialisation, validation min/max.
"""
from .schema import (
    BLOCK_GRID_EDITOR_ALIAS,
    ValidationLimit, AreaConfig, BlockConfig, BlockGridConfiguration,
    BlockGridLayoutItem, BlockGridLayoutAreaItem,
    BlockItemData, BlockGridValue, BlockEditorData, ContentAndSettingsReference,
    ValidationFailure,
)
from .converter import BlockGridEditorDataConverter, BlockEditorValues
from .validators import (
    BlockEditorMinMaxValidatorBase,
    BlockGridMinMaxValidator,
    extract_layout_area_items,
    index_area_configurations,
)
from .editor import BlockGridPropertyValueEditor

__all__ = [
    # Schémas
    "BLOCK_GRID_EDITOR_ALIAS",
    "ValidationLimit", "AreaConfig", "BlockConfig", "BlockGridConfiguration",
    "BlockGridLayoutItem", "BlockGridLayoutAreaItem",
    "BlockItemData", "BlockGridValue", "BlockEditorData", "ContentAndSettingsReference",
    "ValidationFailure",
    # Désérialisation
    "BlockGridEditorDataConverter", "BlockEditorValues",
    # Validation
    "BlockEditorMinMaxValidatorBase", "BlockGridMinMaxValidator",
    "extract_layout_area_items", "index_area_configurations",
    "BlockGridPropertyValueEditor",
]
