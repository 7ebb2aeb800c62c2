"""
Schémas Pydantic du block grid.
Structure récursive : LayoutItem → AreaItem → LayoutItem → ...

Configuration : BlockGridConfiguration → BlockConfig → AreaConfig
Valeur stockée : BlockGridValue (layout + contentData + settingsData)
"""
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

BLOCK_GRID_EDITOR_ALIAS = "Umbraco.BlockGrid"


class _CamelModel(BaseModel):
    """Accepte indifféremment les noms JSON (camelCase) et Python."""
    model_config = ConfigDict(populate_by_name=True)


# ── Configuration ───────────────────────────────────────────────────────────

class ValidationLimit(_CamelModel):
    """Bornes globales sur le nombre de blocs racine."""
    min: Optional[int] = None
    max: Optional[int] = None


class AreaConfig(_CamelModel):
    """Type de zone déclaré par un bloc. La clé identifie le type, pas la position."""
    key: UUID
    alias: Optional[str] = None
    column_span: Optional[int] = Field(default=None, alias="columnSpan")
    row_span: Optional[int] = Field(default=None, alias="rowSpan")
    min_allowed: Optional[int] = Field(default=None, alias="minAllowed")
    max_allowed: Optional[int] = Field(default=None, alias="maxAllowed")


class BlockConfig(_CamelModel):
    """Type de bloc autorisé dans la grille."""
    content_element_type_key: Optional[UUID] = Field(default=None, alias="contentElementTypeKey")
    settings_element_type_key: Optional[UUID] = Field(default=None, alias="settingsElementTypeKey")
    label: Optional[str] = None
    allow_at_root: bool = Field(default=True, alias="allowAtRoot")
    allow_in_areas: bool = Field(default=True, alias="allowInAreas")
    areas: List[AreaConfig] = Field(default_factory=list)


class BlockGridConfiguration(_CamelModel):
    """Configuration d'un champ block grid (chargée par type de contenu)."""
    blocks: List[BlockConfig] = Field(default_factory=list)
    validation_limit: ValidationLimit = Field(default_factory=ValidationLimit, alias="validationLimit")
    grid_columns: int = Field(default=12, alias="gridColumns")


# ── Layout ──────────────────────────────────────────────────────────────────

class BlockGridLayoutItem(_CamelModel):
    """Bloc placé dans la grille (racine ou à l'intérieur d'une zone)."""
    content_udi: Optional[str] = Field(default=None, alias="contentUdi")
    settings_udi: Optional[str] = Field(default=None, alias="settingsUdi")
    column_span: Optional[int] = Field(default=None, alias="columnSpan")
    row_span: Optional[int] = Field(default=None, alias="rowSpan")
    areas: List["BlockGridLayoutAreaItem"] = Field(default_factory=list)


class BlockGridLayoutAreaItem(_CamelModel):
    """Zone d'un bloc, contenant elle-même des blocs."""
    key: UUID
    items: List[BlockGridLayoutItem] = Field(default_factory=list)


BlockGridLayoutItem.model_rebuild()


class BlockItemData(_CamelModel):
    """Données d'un bloc (contenu ou paramètres). Les propriétés restent libres."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    udi: Optional[str] = None
    content_type_key: Optional[UUID] = Field(default=None, alias="contentTypeKey")


class BlockGridValue(_CamelModel):
    """Valeur stockée d'une propriété block grid."""
    layout: Dict[str, List[BlockGridLayoutItem]] = Field(default_factory=dict)
    content_data: List[BlockItemData] = Field(default_factory=list, alias="contentData")
    settings_data: List[BlockItemData] = Field(default_factory=list, alias="settingsData")


class ContentAndSettingsReference(BaseModel):
    content_udi: Optional[str] = None
    settings_udi: Optional[str] = None


class BlockEditorData(BaseModel):
    """Arbre désérialisé, propre à un appel de validation."""
    block_value: BlockGridValue
    references: List[ContentAndSettingsReference] = Field(default_factory=list)

    @property
    def layout(self) -> List[BlockGridLayoutItem]:
        return self.block_value.layout.get(BLOCK_GRID_EDITOR_ALIAS, [])


# ── Résultats ───────────────────────────────────────────────────────────────

class ValidationFailure(BaseModel):
    """Échec de validation remonté au pipeline de sauvegarde."""
    message: str
    member_names: List[str] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
