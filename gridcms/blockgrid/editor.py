"""
Éditeur de valeur block grid — agrège les validateurs d'une propriété.
"""
from typing import Any, List, Optional, Set
from uuid import UUID

from ..core.i18n import LocalizedTextService
from .converter import BlockEditorValues, BlockGridEditorDataConverter
from .schema import ValidationFailure
from .validators import BlockEditorMinMaxValidatorBase, BlockGridMinMaxValidator, TextService


class BlockGridPropertyValueEditor:
    """
    Éditeur de valeur d'une propriété block grid.

    Usage:
        >>> editor = BlockGridPropertyValueEditor(LocalizedTextService("fr"))
        >>> failures = editor.validate(raw_value, configuration)
    """

    def __init__(
        self,
        text_service: Optional[TextService] = None,
        element_type_keys: Optional[Set[UUID]] = None,
    ):
        """
        Args:
            text_service: Service de messages localisés (langue par défaut si absent)
            element_type_keys: Types d'élément connus ; None = pas de filtrage
        """
        self.text_service = text_service or LocalizedTextService()
        self.block_editor_values = BlockEditorValues(BlockGridEditorDataConverter(), element_type_keys)
        self.validators: List[BlockEditorMinMaxValidatorBase] = [
            BlockGridMinMaxValidator(self.block_editor_values, self.text_service),
        ]

    def validate(self, value: Any, configuration: Any, value_type: Optional[str] = None) -> List[ValidationFailure]:
        """Exécute chaque validateur dans l'ordre et concatène leurs échecs."""
        failures: List[ValidationFailure] = []
        for validator in self.validators:
            failures.extend(validator.validate(value, value_type, configuration))
        return failures
