# app/domains/filters/services/query_compiler.py
"""
Compilador de filtros de perfis.

Transforma um FilterSpec normalizado numa árvore de predicados SQLAlchemy
sobre `profiles`. As listas do perfil (features, availability, media) são
testadas com EXISTS correlacionados: "existe pelo menos um elemento que...".

Regras:
- facets diferentes combinam-se com AND; valores dentro da mesma facet com OR;
- keys de facet desconhecidas são ignoradas (reportadas ao observer);
- a única leitura feita é um find_by_keys em lote para todas as facets.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import ColumnElement, Select, and_, exists, func, not_, select, true

from app.core.normalize import norm_text
from app.domains.filters.services.observer import CompileObserver, default_observer
from app.models.profile import (
    AvailabilitySlot,
    Profile,
    ProfileAvailability,
    ProfileFeature,
    ProfileMedia,
    ProfileRate,
)
from app.models.profile_verification import ProfileVerification
from app.models.user import User
from app.schemas.filters import FilterSpec


class AttributeGroupLookup(Protocol):
    def find_by_keys(self, keys: Sequence[str]) -> Iterable[tuple[str, int]]: ...


@dataclass(frozen=True)
class CompiledProfileQuery:
    # predicados de topo (estado, localização, preço, verificação...)
    conditions: tuple[ColumnElement[bool], ...] = ()
    # EXISTS de facets e disponibilidade, sempre em AND
    conjuncts: tuple[ColumnElement[bool], ...] = ()
    skipped_facets: tuple[str, ...] = ()

    @property
    def clauses(self) -> tuple[ColumnElement[bool], ...]:
        return self.conditions + self.conjuncts

    def predicate(self) -> ColumnElement[bool]:
        if not self.clauses:
            return true()
        return and_(*self.clauses)

    def apply(self, stmt: Select) -> Select:
        """Aplica o mesmo conjunto de predicados a qualquer SELECT sobre profiles."""
        clauses = self.clauses
        return stmt.where(*clauses) if clauses else stmt


def min_rate_price():
    """Menor preço das tarifas do perfil (NULL se não tiver tarifas)."""
    return (
        select(func.min(ProfileRate.price))
        .where(ProfileRate.profile_id == Profile.id)
        .correlate(Profile)
        .scalar_subquery()
    )


def normalize_values(values: Iterable[str]) -> list[str]:
    """lower + trim, sem duplicados, pela ordem original."""
    out: list[str] = []
    for v in values:
        n = norm_text(v)
        if n and n not in out:
            out.append(n)
    return out


def compile_profile_query(
    spec: FilterSpec,
    groups: AttributeGroupLookup,
    *,
    observer: CompileObserver | None = None,
) -> CompiledProfileQuery:
    observer = observer or default_observer

    conditions: list[ColumnElement[bool]] = []
    conjuncts: list[ColumnElement[bool]] = []

    # 1) Estado (omitido = ativos e inativos)
    if spec.is_active is not None:
        conditions.append(Profile.is_active == spec.is_active)

    # 2) Localização: país é texto livre; departamento/cidade comparam o value
    if spec.location:
        if spec.location.country:
            conditions.append(Profile.country == spec.location.country)
        if spec.location.department:
            conditions.append(Profile.department_value == spec.location.department)
        if spec.location.city:
            conditions.append(Profile.city_value == spec.location.city)

    # 3) Verificação da conta (profile -> user)
    if spec.is_verified is not None:
        conditions.append(
            exists(
                select(User.id).where(
                    User.id == Profile.user_id,
                    User.is_verified == spec.is_verified,
                )
            )
        )

    conditions.extend(_verification_conditions(spec))

    if spec.has_videos:
        conditions.append(
            exists(
                select(ProfileMedia.id).where(
                    ProfileMedia.profile_id == Profile.id,
                    ProfileMedia.kind == "video",
                )
            )
        )

    if spec.age_range:
        if spec.age_range.min is not None:
            conditions.append(Profile.age >= spec.age_range.min)
        if spec.age_range.max is not None:
            conditions.append(Profile.age <= spec.age_range.max)

    # 4) Facets: um único lookup para todas as keys
    skipped: list[str] = []
    if spec.features:
        key_to_id = dict(groups.find_by_keys(list(spec.features)))
        for key, values in spec.features.items():
            group_id = key_to_id.get(key)
            if group_id is None:
                skipped.append(key)
                observer.facet_unresolved(key)
                continue
            normalized = normalize_values(values)
            if not normalized:
                continue
            conjuncts.append(
                exists(
                    select(ProfileFeature.id).where(
                        ProfileFeature.profile_id == Profile.id,
                        ProfileFeature.group_id == group_id,
                        ProfileFeature.value.in_(normalized),
                    )
                )
            )

    # 5) Preço: sobre a tarifa mais baixa, nas unidades do store
    if spec.price_range:
        lowest = min_rate_price()
        if spec.price_range.min is not None:
            conditions.append(lowest >= spec.price_range.min)
        if spec.price_range.max is not None:
            conditions.append(lowest <= spec.price_range.max)

    # 6) Disponibilidade: dia e janela são condições independentes
    if spec.availability:
        day = spec.availability.day_of_week
        if day:
            conjuncts.append(
                exists(
                    select(ProfileAvailability.id).where(
                        ProfileAvailability.profile_id == Profile.id,
                        ProfileAvailability.day_of_week == day,
                    )
                )
            )
        slot = spec.availability.time_slot
        if slot and (slot.start or slot.end):
            # o slot guardado tem de conter a janela pedida
            slot_where = [ProfileAvailability.profile_id == Profile.id]
            if slot.start:
                slot_where.append(AvailabilitySlot.start <= slot.start)
            if slot.end:
                slot_where.append(AvailabilitySlot.end >= slot.end)
            conjuncts.append(
                exists(
                    select(AvailabilitySlot.id)
                    .join(ProfileAvailability, ProfileAvailability.id == AvailabilitySlot.availability_id)
                    .where(*slot_where)
                )
            )

    query = CompiledProfileQuery(
        conditions=tuple(conditions),
        conjuncts=tuple(conjuncts),
        skipped_facets=tuple(skipped),
    )
    observer.compiled(query)
    return query


def _verification_conditions(spec: FilterSpec) -> list[ColumnElement[bool]]:
    out: list[ColumnElement[bool]] = []

    # Vídeo verificado; False = perfis sem vídeo verificado (inclui sem verificação)
    if spec.profile_verified is not None:
        video_ok = exists(
            select(ProfileVerification.id).where(
                ProfileVerification.profile_id == Profile.id,
                ProfileVerification.video_verified.is_(True),
            )
        )
        out.append(video_ok if spec.profile_verified else not_(video_ok))

    # Documento: foto frontal + selfie
    if spec.document_verified is not None:
        docs_ok = exists(
            select(ProfileVerification.id).where(
                ProfileVerification.profile_id == Profile.id,
                ProfileVerification.front_photo_verified.is_(True),
                ProfileVerification.selfie_verified.is_(True),
            )
        )
        out.append(docs_ok if spec.document_verified else not_(docs_ok))

    return out
