"""
Validateurs min/max du block grid.

1. Nombre de blocs racine borné par validation_limit (min/max)
2. Nombre d'éléments de chaque zone, à toute profondeur, borné par
   min_allowed/max_allowed de la zone configurée

Les échecs sont des ValidationFailure ; aucune exception n'est levée.
Une configuration absente ou d'un autre type → rien à valider.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Protocol
from uuid import UUID

from .converter import BlockEditorValues
from .schema import (
    AreaConfig,
    BlockEditorData,
    BlockGridConfiguration,
    BlockGridLayoutAreaItem,
    BlockGridLayoutItem,
    ValidationFailure,
)

log = logging.getLogger(__name__)


class TextService(Protocol):
    def localize(self, category: str, key: str, tokens: Optional[dict] = None) -> str: ...


def index_area_configurations(configuration: BlockGridConfiguration) -> Dict[UUID, AreaConfig]:
    """Index clé → AreaConfig. Clé dupliquée entre blocs : la dernière déclarée l'emporte."""
    index: Dict[UUID, AreaConfig] = {}
    for block in configuration.blocks:
        for area in block.areas:
            index[area.key] = area
    return index


def extract_layout_area_items(item: BlockGridLayoutItem) -> List[BlockGridLayoutAreaItem]:
    """
    Zones directes du bloc, puis celles des blocs de chaque zone (ordre d'insertion).

    Parcours préfixe à pile explicite : aucune limite de profondeur liée à la récursion.
    """
    areas = []
    stack = [item]
    while stack:
        current = stack.pop()
        areas.extend(current.areas)
        children = [child for area in current.areas for child in area.items]
        stack.extend(reversed(children))
    return areas


def _area_count_mismatch(area: BlockGridLayoutAreaItem, config: AreaConfig) -> bool:
    count = len(area.items)
    if config.min_allowed is not None and count < config.min_allowed:
        return True
    return config.max_allowed is not None and count > config.max_allowed


class BlockEditorMinMaxValidatorBase(ABC):
    """Base des validateurs min/max des éditeurs de blocs."""

    def __init__(self, text_service: TextService):
        self.text_service = text_service

    @abstractmethod
    def validate(
        self,
        value: Any,
        value_type: Optional[str] = None,
        configuration: Any = None,
    ) -> List[ValidationFailure]:
        """Échecs de validation de la valeur ; [] si rien à valider."""

    def validate_number_of_blocks(
        self,
        data: Optional[BlockEditorData],
        min_count: Optional[int],
        max_count: Optional[int],
    ) -> List[ValidationFailure]:
        count = len(data.layout) if data is not None else 0
        failures = []
        # Valeur absente : relève de la validation "obligatoire", pas du minimum
        if min_count is not None and data is not None and count < min_count:
            failures.append(ValidationFailure(
                message=self.text_service.localize(
                    "validation", "entriesShort", {"min": min_count, "missing": min_count - count}),
                member_names=["minCount"],
            ))
        if max_count is not None and count > max_count:
            failures.append(ValidationFailure(
                message=self.text_service.localize(
                    "validation", "entriesExceed", {"max": max_count, "exceeding": count - max_count}),
                member_names=["maxCount"],
            ))
        return failures


class BlockGridMinMaxValidator(BlockEditorMinMaxValidatorBase):
    """
    Valide le nombre de blocs racine et le nombre d'éléments de chaque zone.

    Usage:
        >>> validator = BlockGridMinMaxValidator(BlockEditorValues(), LocalizedTextService("en"))
        >>> validator.validate(raw_json, configuration=config)
        [ValidationFailure(message='...', member_names=['maxCount'])]
    """

    def __init__(self, block_editor_values: BlockEditorValues, text_service: TextService):
        super().__init__(text_service)
        self.block_editor_values = block_editor_values

    def validate(
        self,
        value: Any,
        value_type: Optional[str] = None,
        configuration: Any = None,
    ) -> List[ValidationFailure]:
        if not isinstance(configuration, BlockGridConfiguration):
            return []

        data = self.block_editor_values.deserialize_and_clean(value)

        limit = configuration.validation_limit
        failures = self.validate_number_of_blocks(data, limit.min, limit.max)

        areas = [a for item in (data.layout if data is not None else []) for a in extract_layout_area_items(item)]
        if not areas:
            return failures

        failures.extend(self._validate_areas(areas, index_area_configurations(configuration)))
        return failures

    def _validate_areas(
        self,
        areas: Iterable[BlockGridLayoutAreaItem],
        configs: Dict[UUID, AreaConfig],
    ) -> List[ValidationFailure]:
        failures = []
        for area in areas:
            config = configs.get(area.key)
            if config is None:
                continue
            # Message générique : la zone fautive n'est pas identifiée
            if _area_count_mismatch(area, config):
                log.debug("Zone %s : %d élément(s) hors bornes", area.key, len(area.items))
                failures.append(ValidationFailure(
                    message=self.text_service.localize("validation", "entriesAreasMismatch"),
                ))
        return failures
