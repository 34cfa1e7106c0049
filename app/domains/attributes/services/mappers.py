# app/domains/attributes/services/mappers.py
from __future__ import annotations

from app.models.attribute_group import AttributeGroup, AttributeGroupVariant
from app.schemas.attribute_groups import AttributeGroupOut, VariantOut


def _label_key(v: AttributeGroupVariant) -> str:
    return (v.label or v.value).casefold()


def map_group_to_out(group: AttributeGroup, *, sort_by_label: bool = False) -> AttributeGroupOut:
    variants = list(group.variants)
    if sort_by_label:
        variants.sort(key=_label_key)
    return AttributeGroupOut(
        id=group.id,
        key=group.key,
        name=group.name,
        type=group.type,
        variants=[VariantOut.model_validate(v) for v in variants],
        created_at=group.created_at,
        updated_at=group.updated_at,
    )


def find_variant(group: AttributeGroup, value: str) -> AttributeGroupVariant | None:
    return next((v for v in group.variants if v.value == value), None)
