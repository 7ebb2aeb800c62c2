"""SQLite — init + session + CRUD helpers (utilisateurs, journal d'audit)"""
import json, logging, os
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import create_engine
from sqlalchemy.orm import Query, Session, sessionmaker

from .models import Base, AuditItemDB, AuditType, Direction, UserDB

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"

ENGINE       = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False)

MEDIA_URL    = os.getenv("MEDIA_URL", "/media")
AVATAR_SIZES = (30, 60, 90, 150, 300)

_ADMIN_SECTIONS = ["content", "media", "settings", "users"]


def init_db(db_path: Optional[str] = None):
    """Lie le moteur (DB_PATH ou data/gridcms.db), crée les tables, seed l'administrateur."""
    global ENGINE
    if db_path is None:
        db_path = os.getenv("DB_PATH")
    if db_path is None:
        DATA_DIR.mkdir(exist_ok=True)
        db_path = str(DATA_DIR / "gridcms.db")

    ENGINE = create_engine(f"sqlite:///{db_path}", connect_args={"check_same_thread": False})
    SessionLocal.configure(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)

    # Seed administrateur (uniquement si la table est vide)
    with SessionLocal() as db:
        if db.query(UserDB).count() == 0:
            db.add(UserDB(
                name="Administrator",
                api_token=os.getenv("ADMIN_TOKEN", "changeme"),
                sections=jd(_ADMIN_SECTIONS),
            ))
            db.commit()
            log.info("Utilisateur administrateur créé")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── JSON helpers ──
def jl(s: str) -> list:
    try: return json.loads(s or "[]")
    except json.JSONDecodeError: return []

def jd(o) -> str:
    return json.dumps(o, ensure_ascii=False)


# ── Users ──
def db_create_user(db: Session, obj: UserDB) -> UserDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_user_by_token(db: Session, token: str) -> Optional[UserDB]:
    if not token:
        return None
    return db.query(UserDB).filter_by(api_token=token).first()

def db_get_users_by_id(db: Session, ids: Iterable[int]) -> List[UserDB]:
    ids = set(ids)
    if not ids:
        return []
    return db.query(UserDB).filter(UserDB.id.in_(ids)).all()

def user_sections(user: UserDB) -> List[str]:
    return jl(user.sections)

def user_avatar_urls(user: UserDB) -> List[str]:
    """URLs recadrées de l'avatar (une par taille), [] sans avatar."""
    if not user.avatar:
        return []
    base = f"{MEDIA_URL.rstrip('/')}/{user.avatar.lstrip('/')}"
    return [f"{base}?width={s}&height={s}&mode=crop" for s in AVATAR_SIZES]


# ── Audit ──
def db_add_audit(
    db: Session,
    entity_id: int,
    user_id: int,
    audit_type: AuditType,
    entity_type: Optional[str] = None,
    comment: Optional[str] = None,
    parameters: Optional[str] = None,
    create_date: Optional[datetime] = None,
) -> AuditItemDB:
    obj = AuditItemDB(
        entity_id=entity_id, user_id=user_id, audit_type=AuditType(audit_type).value,
        entity_type=entity_type, comment=comment, parameters=parameters,
        create_date=create_date or datetime.utcnow(),
    )
    db.add(obj); db.commit(); db.refresh(obj); return obj


def _paged(q: Query, page_index: int, page_size: int,
           direction: Direction, since: Optional[datetime]) -> Tuple[List[AuditItemDB], int]:
    if since is not None:
        q = q.filter(AuditItemDB.create_date >= since)
    total = q.count()
    order = AuditItemDB.create_date.asc() if direction == Direction.ASCENDING else AuditItemDB.create_date.desc()
    items = q.order_by(order, AuditItemDB.id).offset(page_index * page_size).limit(page_size).all()
    return items, total


def db_paged_audit_by_entity(db: Session, entity_id: int, page_index: int, page_size: int,
                             direction: Direction = Direction.DESCENDING,
                             since: Optional[datetime] = None) -> Tuple[List[AuditItemDB], int]:
    """Page (index 0) du journal d'une entité → (items, total)."""
    q = db.query(AuditItemDB).filter_by(entity_id=entity_id)
    return _paged(q, page_index, page_size, direction, since)


def db_paged_audit_by_user(db: Session, user_id: int, page_index: int, page_size: int,
                           direction: Direction = Direction.DESCENDING,
                           since: Optional[datetime] = None) -> Tuple[List[AuditItemDB], int]:
    """Page (index 0) du journal d'un utilisateur → (items, total)."""
    q = db.query(AuditItemDB).filter_by(user_id=user_id)
    return _paged(q, page_index, page_size, direction, since)
