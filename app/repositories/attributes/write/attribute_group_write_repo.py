# app/repositories/attributes/write/attribute_group_write_repo.py
"""
Repositório de escrita para grupos de atributos.

Cada operação mexe num único grupo; nada é propagado para os perfis.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.core.normalize import norm_text
from app.models.attribute_group import AttributeGroup, AttributeGroupVariant


class AttributeGroupWriteRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        *,
        key: str,
        name: str,
        type: str = "single",
        variants: list[tuple[str, str | None]] | None = None,
    ) -> AttributeGroup:
        group = AttributeGroup(key=key.strip(), name=name.strip(), type=type)
        for pos, (value, label) in enumerate(variants or []):
            group.variants.append(
                AttributeGroupVariant(value=norm_text(value), label=label, active=True, position=pos)
            )
        self.db.add(group)
        self.db.flush()
        return group

    def add_variant(self, group: AttributeGroup, *, value: str, label: str | None) -> AttributeGroupVariant:
        position = max((v.position for v in group.variants), default=-1) + 1
        variant = AttributeGroupVariant(
            value=norm_text(value), label=label, active=True, position=position
        )
        group.variants.append(variant)
        self.db.flush()
        return variant

    def update_variant(
        self,
        variant: AttributeGroupVariant,
        *,
        value: str | None = None,
        label: str | None = None,
        active: bool | None = None,
    ) -> AttributeGroupVariant:
        if value is not None:
            variant.value = norm_text(value)
        if label is not None:
            variant.label = label
        if active is not None:
            variant.active = active
        self.db.flush()
        return variant

    def remove_variant(self, group: AttributeGroup, variant: AttributeGroupVariant) -> None:
        group.variants.remove(variant)
        self.db.flush()

    def update_group(
        self, group: AttributeGroup, *, key: str | None = None, name: str | None = None
    ) -> AttributeGroup:
        if key is not None:
            group.key = key.strip()
        if name is not None:
            group.name = name.strip()
        self.db.flush()
        return group

    def delete(self, group: AttributeGroup) -> None:
        self.db.delete(group)
        self.db.flush()
