# app/models/profile.py
"""
Perfil publicado e as suas coleções.

As listas do perfil (features, rates, availability, media) vivem em tabelas
filhas; os filtros sobre elas são EXISTS correlacionados.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infra.base import Base, utcnow
from app.models.attribute_group import AttributeGroup
from app.models.profile_verification import ProfileVerification
from app.models.user import User

# nomes guardados em profile_availability.day_of_week (sábado com acento, miercoles sem)
DAYS_OF_WEEK = ("lunes", "martes", "miercoles", "jueves", "viernes", "sábado", "domingo")


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)

    # Localização: país é texto livre; departamento/cidade são pares value/label
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    department_value: Mapped[str | None] = mapped_column(String(100), nullable=True)
    department_label: Mapped[str | None] = mapped_column(String(200), nullable=True)
    city_value: Mapped[str | None] = mapped_column(String(100), nullable=True)
    city_label: Mapped[str | None] = mapped_column(String(200), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    user: Mapped[User] = relationship()
    verification: Mapped[ProfileVerification | None] = relationship(
        uselist=False, cascade="all, delete-orphan"
    )
    features: Mapped[list[ProfileFeature]] = relationship(cascade="all, delete-orphan")
    rates: Mapped[list[ProfileRate]] = relationship(cascade="all, delete-orphan")
    availability: Mapped[list[ProfileAvailability]] = relationship(cascade="all, delete-orphan")
    media: Mapped[list[ProfileMedia]] = relationship(cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_profiles_department_value", "department_value"),
        Index("ix_profiles_city_value", "city_value"),
        Index("ix_profiles_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Profile id={self.id} name={self.name!r}>"


class ProfileFeature(Base):
    __tablename__ = "profile_features"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    profile_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    # sem FK com cascade: remover grupos/variantes não mexe nos perfis
    group_id: Mapped[int] = mapped_column(Integer, nullable=False)
    value: Mapped[str] = mapped_column(String(200), nullable=False)

    group: Mapped[AttributeGroup | None] = relationship(
        primaryjoin="foreign(ProfileFeature.group_id) == AttributeGroup.id",
        viewonly=True,
    )

    __table_args__ = (
        Index("ix_profile_features_lookup", "group_id", "value", "profile_id"),
    )


class ProfileRate(Base):
    __tablename__ = "profile_rates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    profile_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    hour: Mapped[str] = mapped_column(String(10), nullable=False)  # "01:00", "00:30"
    price: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    delivery: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class ProfileAvailability(Base):
    __tablename__ = "profile_availability"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    profile_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day_of_week: Mapped[str] = mapped_column(String(20), nullable=False)

    slots: Mapped[list[AvailabilitySlot]] = relationship(cascade="all, delete-orphan")


class AvailabilitySlot(Base):
    __tablename__ = "availability_slots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    availability_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("profile_availability.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # "HH:MM" zero-padded, comparável lexicograficamente
    start: Mapped[str] = mapped_column(String(5), nullable=False)
    end: Mapped[str] = mapped_column(String(5), nullable=False)
    timezone: Mapped[str] = mapped_column(String(50), nullable=False, default="America/Bogota")


class ProfileMedia(Base):
    __tablename__ = "profile_media"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    profile_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    kind: Mapped[str] = mapped_column(String(20), nullable=False)  # gallery | video | audio
    link: Mapped[str] = mapped_column(Text, nullable=False)
    preview: Mapped[str | None] = mapped_column(Text, nullable=True)
