"""
Data models — User, AuditItem
SQLAlchemy (SQLite) + Pydantic v2 + Enums
"""
import math
import uuid
from datetime import datetime
from enum import Enum
from typing import Generic, List, Optional, TypeVar

import sqlalchemy as sa
from pydantic import BaseModel, Field
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ── ENUMS ──────────────────────────────────────────────────────────────

class AuditType(str, Enum):
    NEW                  = "New"
    SAVE                 = "Save"
    SAVE_VARIANT         = "SaveVariant"
    OPEN                 = "Open"
    DELETE               = "Delete"
    PUBLISH              = "Publish"
    PUBLISH_VARIANT      = "PublishVariant"
    SEND_TO_PUBLISH      = "SendToPublish"
    UNPUBLISH            = "Unpublish"
    UNPUBLISH_VARIANT    = "UnpublishVariant"
    MOVE                 = "Move"
    COPY                 = "Copy"
    ASSIGN_DOMAIN        = "AssignDomain"
    PUBLIC_ACCESS        = "PublicAccess"
    SORT                 = "Sort"
    NOTIFY               = "Notify"
    SYSTEM               = "System"
    ROLLBACK             = "RollBack"
    PACKAGER_INSTALL     = "PackagerInstall"
    PACKAGER_UNINSTALL   = "PackagerUninstall"
    CUSTOM               = "Custom"


class Direction(str, Enum):
    ASCENDING  = "Ascending"
    DESCENDING = "Descending"


# Sections backoffice donnant accès au journal d'une entité
LOG_SECTIONS = ("content", "media")


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class UserDB(Base):
    __tablename__ = "users"
    id:        Mapped[int]           = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    name:      Mapped[str]           = mapped_column(sa.String, nullable=False)
    email:     Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    avatar:    Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    api_token: Mapped[str]           = mapped_column(sa.String, unique=True, default=lambda: uuid.uuid4().hex)
    sections:  Mapped[str]           = mapped_column(sa.Text, default="[]")


class AuditItemDB(Base):
    __tablename__ = "audit_log"
    __table_args__ = (
        sa.Index("ix_audit_entity_date", "entity_id", "create_date"),
        sa.Index("ix_audit_user_date", "user_id", "create_date"),
    )
    id:          Mapped[int]           = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    entity_id:   Mapped[int]           = mapped_column(sa.Integer, nullable=False)
    user_id:     Mapped[int]           = mapped_column(sa.Integer, nullable=False)
    audit_type:  Mapped[str]           = mapped_column(sa.String, nullable=False)
    entity_type: Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    comment:     Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    parameters:  Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    create_date: Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)


# ── PYDANTIC SCHEMAS ────────────────────────────────────────────────────

class AuditLog(BaseModel):
    user_id:      int
    user_name:    Optional[str] = None
    user_avatars: List[str]     = Field(default_factory=list)
    node_id:      int
    timestamp:    datetime
    log_type:     str
    entity_type:  Optional[str] = None
    comment:      Optional[str] = None
    parameters:   Optional[str] = None

    @classmethod
    def from_item(cls, item: AuditItemDB) -> "AuditLog":
        return cls(
            user_id=item.user_id,
            node_id=item.entity_id,
            timestamp=item.create_date,
            log_type=item.audit_type,
            entity_type=item.entity_type,
            comment=item.comment,
            parameters=item.parameters,
        )


T = TypeVar("T")


class PagedResult(BaseModel, Generic[T]):
    """Page de résultats (page_number commence à 1)."""
    total_items: int
    page_number: int
    page_size:   int
    total_pages: int     = 0
    items:       List[T] = Field(default_factory=list)

    @classmethod
    def create(cls, total_items: int, page_number: int, page_size: int, items: Optional[List[T]] = None):
        total_pages = math.ceil(total_items / page_size) if page_size > 0 else 1
        return cls(
            total_items=total_items,
            page_number=page_number,
            page_size=page_size,
            total_pages=total_pages,
            items=items or [],
        )
