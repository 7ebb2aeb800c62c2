"""
i18n — service de textes localisés.

Catalogues i18n/{lang}.json : {"categorie": {"cle": "texte"}}
localize("validation", "entriesShort", {"min": 2}) → texte localisé, placeholders résolus
Clés format "@categorie.cle" → texte localisé (compat page builder)
"""
import json
import logging
import os
import re
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)

_I18N_CACHE: dict = {}
_I18N_DIR = Path(__file__).parent.parent / "i18n"

DEFAULT_LANG = os.getenv("GRIDCMS_LANG", "en")


def _load_lang(lang: str) -> dict:
    """Charge le fichier i18n/{lang}.json (lazy, mis en cache)."""
    if lang not in _I18N_CACHE:
        path = _I18N_DIR / f"{lang}.json"
        if path.exists():
            with open(path, encoding="utf-8") as f:
                _I18N_CACHE[lang] = json.load(f)
        else:
            log.warning("Catalogue i18n absent : %s", path)
            _I18N_CACHE[lang] = {}
    return _I18N_CACHE[lang]


def i18n_resolve(value: str, lang: str = DEFAULT_LANG) -> str:
    """
    Résout une clé i18n.
    "@validation.entriesShort" → texte localisé
    "texte direct" → retourné tel quel
    """
    if not value or not value.startswith("@"):
        return value

    key = value[1:]
    node = _load_lang(lang)

    # "validation.entriesShort" → catalog["validation"]["entriesShort"]
    for part in key.split("."):
        if isinstance(node, dict) and part in node:
            node = node[part]
        else:
            return f"[missing:{key}]"

    return str(node) if not isinstance(node, dict) else f"[missing:{key}]"


def resolve_placeholders(text: str, context: Optional[dict] = None) -> str:
    """
    Remplace les placeholders {min}, {max}, etc. par les valeurs du contexte.
    Les placeholders sans correspondance sont laissés intacts.
    """
    if not context or not text:
        return text

    def replacer(match):
        placeholder = match.group(1)
        return str(context.get(placeholder, match.group(0)))

    return re.sub(r"\{(\w+)\}", replacer, text)


def languages() -> list[str]:
    """Langues disponibles (fichiers présents dans i18n/)."""
    return sorted(p.stem for p in _I18N_DIR.glob("*.json"))


def reload_cache():
    """Force le rechargement du cache i18n (utile en dev)."""
    _I18N_CACHE.clear()


class LocalizedTextService:
    """
    Fournit les messages lisibles par catégorie/clé pour une langue donnée.

    Usage:
        >>> texts = LocalizedTextService("fr")
        >>> texts.localize("validation", "entriesExceed", {"max": 5, "exceeding": 1})
    """

    def __init__(self, lang: str = DEFAULT_LANG):
        self.lang = lang

    def localize(self, category: str, key: str, tokens: Optional[dict] = None) -> str:
        text = i18n_resolve(f"@{category}.{key}", self.lang)
        return resolve_placeholders(text, tokens)
