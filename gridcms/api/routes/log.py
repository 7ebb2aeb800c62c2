"""
Journal d'audit — historique paginé.
GET /api/log/entity/{id}?page_number=1&page_size=10&order_direction=Descending&since_date=...
GET /api/log/current-user?page_number=1&page_size=10
Identité : header X-Api-Token, ?token= ou cookie api_token
"""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from ...database import (
    get_db, db_get_user_by_token, db_get_users_by_id,
    db_paged_audit_by_entity, db_paged_audit_by_user,
    user_avatar_urls, user_sections,
)
from ...models import AuditLog, Direction, LOG_SECTIONS, PagedResult, UserDB

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/log", tags=["Log"])


# ── Helpers ────────────────────────────────────────────────────────────────────

def _current_user(request: Request, db: Session = Depends(get_db)) -> UserDB:
    token = (request.headers.get("X-Api-Token")
             or request.query_params.get("token")
             or request.cookies.get("api_token", ""))
    user = db_get_user_by_token(db, token)
    if user is None:
        raise HTTPException(403, "Accès refusé")
    return user


def _require_log_sections(user: UserDB = Depends(_current_user)) -> UserDB:
    if not set(user_sections(user)) & set(LOG_SECTIONS):
        raise HTTPException(403, "Accès refusé : sections content ou media requises")
    return user


def _map_avatars_and_names(db: Session, items: List[AuditLog]) -> List[AuditLog]:
    """Complète nom + avatars ; utilisateur inconnu → champs laissés vides."""
    users = {u.id: u for u in db_get_users_by_id(db, (i.user_id for i in items))}
    for item in items:
        user = users.get(item.user_id)
        if user is None:
            continue
        item.user_name = user.name
        item.user_avatars = user_avatar_urls(user)
    return items


# ── Endpoints API ──────────────────────────────────────────────────────────────

@router.get("/entity/{entity_id}", response_model=PagedResult[AuditLog])
def get_paged_entity_log(
    entity_id: int,
    page_number: int = Query(1),
    page_size: int = Query(10),
    order_direction: Direction = Query(Direction.DESCENDING),
    since_date: Optional[datetime] = Query(None),
    user: UserDB = Depends(_require_log_sections),
    db: Session = Depends(get_db),
):
    """Journal paginé d'une entité (contenu ou média)."""
    if page_size <= 0 or page_number <= 0:
        return PagedResult[AuditLog].create(0, page_number, page_size)

    items, total = db_paged_audit_by_entity(db, entity_id, page_number - 1, page_size, order_direction, since_date)
    mapped = [AuditLog.from_item(i) for i in items]
    log.debug("Journal entité %s : %d/%d (user %s)", entity_id, len(mapped), total, user.id)
    return PagedResult[AuditLog].create(total, page_number, page_size, _map_avatars_and_names(db, mapped))


@router.get("/current-user", response_model=PagedResult[AuditLog])
def get_paged_current_user_log(
    page_number: int = Query(1),
    page_size: int = Query(10),
    order_direction: Direction = Query(Direction.DESCENDING),
    since_date: Optional[datetime] = Query(None),
    user: UserDB = Depends(_current_user),
    db: Session = Depends(get_db),
):
    """Journal paginé de l'utilisateur appelant."""
    if page_size <= 0 or page_number <= 0:
        return PagedResult[AuditLog].create(0, page_number, page_size)

    items, total = db_paged_audit_by_user(db, user.id, page_number - 1, page_size, order_direction, since_date)
    mapped = [AuditLog.from_item(i) for i in items]
    return PagedResult[AuditLog].create(total, page_number, page_size, _map_avatars_and_names(db, mapped))
