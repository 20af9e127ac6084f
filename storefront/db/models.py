from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, Index, Integer, JSON, String, UniqueConstraint

from .base import Base


class OverlayDocument(Base):
    """One whole JSON document per (resource family, scope)."""

    __tablename__ = "overlay_documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    family = Column(String, nullable=False)
    scope_key = Column(String, nullable=False)
    payload = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("family", "scope_key", name="uq_overlay_family_scope"),
        Index("ix_overlay_family", "family"),
    )


__all__ = ["OverlayDocument"]
