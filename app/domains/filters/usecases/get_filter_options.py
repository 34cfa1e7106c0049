# app/domains/filters/usecases/get_filter_options.py
"""
UseCase que devolve o vocabulário completo para construir a UI de filtros:
categorias, localizações, variantes ativas por facet e intervalo de preços.

Não está no caminho quente da pesquisa; o cliente chama uma vez e guarda.
"""

from __future__ import annotations

import logging

from app.core.config import settings
from app.core.logging import log_timing
from app.infra.fanout import run_parallel
from app.infra.uow import UoW
from app.repositories.attributes.read.attribute_group_read_repo import (
    AttributeGroupReadRepository,
)
from app.repositories.profiles.read.profile_options_read_repo import ProfileOptionsReadRepository
from app.schemas.filters import (
    FilterOptionsOut,
    LabeledValueOut,
    LocationOptionsOut,
    OptionOut,
    PriceBoundsOut,
)

log = logging.getLogger("pfl.filters.options")

CATEGORY_GROUP_KEY = "category"


def _locations_task(db):
    return ProfileOptionsReadRepository(db).distinct_locations()


def _price_task(db):
    return ProfileOptionsReadRepository(db).price_bounds()


def _groups_task(db) -> dict[str, list[OptionOut]]:
    features: dict[str, list[OptionOut]] = {}
    for group in AttributeGroupReadRepository(db).find_all():
        features[group.key] = [
            OptionOut(label=v.display_label, value=v.value) for v in group.variants if v.active
        ]
    return features


def execute(uow: UoW) -> FilterOptionsOut:
    with log_timing("get_filter_options", log):
        (countries, departments, cities), (min_price, max_price), features = run_parallel(
            uow,
            _locations_task,
            _price_task,
            _groups_task,
            parallel=settings.FILTERS_PARALLEL_READS,
        )

    return FilterOptionsOut(
        categories=list(features.get(CATEGORY_GROUP_KEY, [])),
        locations=LocationOptionsOut(
            countries=countries,
            departments=[LabeledValueOut(value=v, label=lbl) for v, lbl in departments],
            cities=[LabeledValueOut(value=v, label=lbl) for v, lbl in cities],
        ),
        features=features,
        price_range=PriceBoundsOut(min=min_price or 0, max=max_price or 0),
    )
