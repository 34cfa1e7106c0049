# app/repositories/profiles/read/profile_options_read_repo.py
"""
Leituras agregadas sobre perfis ativos para montar as opções de filtro.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.profile import Profile, ProfileRate


class ProfileOptionsReadRepository:
    def __init__(self, db: Session):
        self.db = db

    def distinct_locations(
        self,
    ) -> tuple[list[str], list[tuple[str, str | None]], list[tuple[str, str | None]]]:
        """
        Devolve (countries, departments, cities) distintos dos perfis ativos.
        Departamentos e cidades vêm como pares (value, label).
        """
        active = Profile.is_active.is_(True)

        countries = self.db.scalars(
            select(Profile.country)
            .where(active, Profile.country.isnot(None), Profile.country != "")
            .distinct()
            .order_by(Profile.country)
        ).all()

        departments = self.db.execute(
            select(Profile.department_value, func.max(Profile.department_label))
            .where(active, Profile.department_value.isnot(None), Profile.department_value != "")
            .group_by(Profile.department_value)
            .order_by(Profile.department_value)
        ).all()

        cities = self.db.execute(
            select(Profile.city_value, func.max(Profile.city_label))
            .where(active, Profile.city_value.isnot(None), Profile.city_value != "")
            .group_by(Profile.city_value)
            .order_by(Profile.city_value)
        ).all()

        return (
            list(countries),
            [(value, label) for value, label in departments],
            [(value, label) for value, label in cities],
        )

    def price_bounds(self) -> tuple[float | None, float | None]:
        """(min, max) de todas as tarifas de perfis ativos; (None, None) se não houver."""
        row = self.db.execute(
            select(func.min(ProfileRate.price), func.max(ProfileRate.price))
            .join(Profile, Profile.id == ProfileRate.profile_id)
            .where(Profile.is_active.is_(True))
        ).one()
        return row[0], row[1]
