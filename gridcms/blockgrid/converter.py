"""
Désérialisation d'une valeur block grid → BlockEditorData.

Entrées acceptées : JSON (str/bytes), dict, BlockGridValue, None.
Une valeur absente ou invalide donne None : jamais d'exception vers l'appelant.
Au-delà de MAX_LAYOUT_DEPTH niveaux de blocs, la valeur est ignorée (None, avertissement).
"""
import json
import logging
from typing import Any, Iterable, List, Optional, Set
from uuid import UUID

from pydantic import ValidationError

from .schema import (
    BlockEditorData,
    BlockGridLayoutItem,
    BlockGridValue,
    BlockItemData,
    ContentAndSettingsReference,
)

log = logging.getLogger(__name__)

# Profondeur maximale (niveaux de blocs) d'une valeur acceptée ; au-delà → None
MAX_LAYOUT_DEPTH = 100


def _collect_references(items: Iterable[BlockGridLayoutItem]) -> List[ContentAndSettingsReference]:
    """Références contenu/paramètres de tous les blocs, zones imbriquées comprises (préfixe)."""
    refs = []
    stack = list(reversed(list(items)))
    while stack:
        item = stack.pop()
        refs.append(ContentAndSettingsReference(content_udi=item.content_udi, settings_udi=item.settings_udi))
        children = [child for area in item.areas for child in area.items]
        stack.extend(reversed(children))
    return refs


def _layout_depth(raw: dict) -> int:
    """Nombre de niveaux de blocs d'une valeur brute, calculé sans récursion."""
    layout = raw.get("layout")
    if not isinstance(layout, dict):
        return 0
    depth = 0
    stack = [(items, 1) for items in layout.values() if isinstance(items, list)]
    while stack:
        items, level = stack.pop()
        for item in items:
            if not isinstance(item, dict):
                continue
            depth = max(depth, level)
            areas = item.get("areas")
            if not isinstance(areas, list):
                continue
            for area in areas:
                if isinstance(area, dict) and isinstance(area.get("items"), list):
                    stack.append((area["items"], level + 1))
    return depth


class BlockGridEditorDataConverter:
    """Convertit la valeur brute d'une propriété en arbre de layout."""

    def deserialize(self, raw: Any) -> Optional[BlockEditorData]:
        value = self._parse(raw)
        if value is None:
            return None
        data = BlockEditorData(block_value=value)
        data.references = _collect_references(data.layout)
        return data

    def _parse(self, raw: Any) -> Optional[BlockGridValue]:
        if raw is None:
            return None
        if isinstance(raw, BlockGridValue):
            try:
                return raw.model_copy(deep=True)
            except RecursionError:
                log.warning("Valeur block grid ignorée : modèle trop profond pour être copié")
                return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        if isinstance(raw, str):
            if not raw.strip():
                return None
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as e:
                log.warning("Valeur block grid illisible (JSON) : %s", e)
                return None
            except RecursionError:
                log.warning("Valeur block grid ignorée : JSON trop profond pour être décodé")
                return None
        if not isinstance(raw, dict):
            log.warning("Valeur block grid inattendue : %s", type(raw).__name__)
            return None
        depth = _layout_depth(raw)
        if depth > MAX_LAYOUT_DEPTH:
            log.warning("Valeur block grid ignorée : profondeur %d > %d niveaux", depth, MAX_LAYOUT_DEPTH)
            return None
        try:
            return BlockGridValue.model_validate(raw)
        except ValidationError as e:
            log.warning("Valeur block grid invalide : %s erreur(s)", e.error_count())
            return None
        except RecursionError:
            log.warning("Valeur block grid ignorée : profondeur excessive à la validation")
            return None


class BlockEditorValues:
    """
    Désérialise puis nettoie une valeur block grid.

    - pas de contentData → None (zéro bloc), settings vidés
    - contenus/paramètres non référencés par le layout → retirés
    - types d'élément inconnus (si element_type_keys fourni) → retirés
    """

    def __init__(
        self,
        converter: Optional[BlockGridEditorDataConverter] = None,
        element_type_keys: Optional[Set[UUID]] = None,
    ):
        self.converter = converter or BlockGridEditorDataConverter()
        self.element_type_keys = element_type_keys

    def deserialize_and_clean(self, raw: Any) -> Optional[BlockEditorData]:
        data = self.converter.deserialize(raw)
        if data is None:
            return None

        value = data.block_value
        if not value.content_data:
            value.settings_data = []
            return None

        content_udis = {r.content_udi for r in data.references if r.content_udi}
        settings_udis = {r.settings_udi for r in data.references if r.settings_udi}
        value.content_data = [b for b in value.content_data if self._keep(b, content_udis)]
        value.settings_data = [b for b in value.settings_data if self._keep(b, settings_udis)]
        return data

    def _keep(self, block: BlockItemData, referenced: Set[str]) -> bool:
        if block.udi is None or block.udi not in referenced:
            return False
        if self.element_type_keys is None:
            return True
        return block.content_type_key in self.element_type_keys
