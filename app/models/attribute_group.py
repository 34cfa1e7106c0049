# app/models/attribute_group.py
"""
Grupos de atributos (facets) e respetivas variantes.

Ex.: key="hairColor", name="Color de cabello", variants=[rubio, negro, ...].
As variantes são geridas pelo back-office; variantes inativas deixam de
aparecer nas opções de filtro mas os perfis que as referenciam mantêm-se.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infra.base import Base, utcnow


class AttributeGroup(Base):
    __tablename__ = "attribute_groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    # single | multi (informativo: o compilador de filtros não o aplica)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="single")

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    variants: Mapped[list[AttributeGroupVariant]] = relationship(
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="AttributeGroupVariant.position",
    )

    def __repr__(self) -> str:
        return f"<AttributeGroup id={self.id} key={self.key}>"


class AttributeGroupVariant(Base):
    __tablename__ = "attribute_group_variants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("attribute_groups.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # valor normalizado (lower/trim), é o que fica guardado em profile_features.value
    value: Mapped[str] = mapped_column(String(200), nullable=False)
    # registos antigos não têm label; usa-se value como fallback
    label: Mapped[str | None] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    group: Mapped[AttributeGroup] = relationship(back_populates="variants")

    __table_args__ = (UniqueConstraint("group_id", "value", name="ux_variant_group_value"),)

    @property
    def display_label(self) -> str:
        return self.label or self.value
