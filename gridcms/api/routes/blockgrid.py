"""
Block grid — validation d'une valeur avant sauvegarde.
POST /api/block-grid/validate?lang=en  {value, configuration} → {"valid": bool, "failures": [...]}
"""
import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, ValidationError

from ...blockgrid import BlockGridConfiguration, BlockGridPropertyValueEditor
from ...core.i18n import DEFAULT_LANG, LocalizedTextService, languages

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/block-grid", tags=["Block grid"])


class BlockGridValidateRequest(BaseModel):
    value: Any = None
    configuration: Any = None


def _parse_configuration(raw: Any) -> Any:
    """Configuration typée ; autre chose qu'un objet, ou invalide → renvoyée brute (rien à valider)."""
    if not isinstance(raw, dict):
        return raw
    try:
        return BlockGridConfiguration.model_validate(raw)
    except ValidationError as e:
        log.warning("Configuration block grid invalide (%d erreur(s)), validation ignorée", e.error_count())
        return raw


@router.post("/validate", summary="Valide une valeur block grid")
def validate(req: BlockGridValidateRequest, lang: str = Query(DEFAULT_LANG)) -> dict:
    if lang not in languages():
        raise HTTPException(404, f"Langue '{lang}' non disponible")

    editor = BlockGridPropertyValueEditor(LocalizedTextService(lang))
    failures = editor.validate(req.value, _parse_configuration(req.configuration))
    return {
        "valid": not failures,
        "failures": [f.to_dict() for f in failures],
    }
