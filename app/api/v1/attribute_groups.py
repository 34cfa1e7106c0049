# app/api/v1/attribute_groups.py
"""
API endpoints de back-office para grupos de atributos (facets) e variantes.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from app.core.deps import get_uow, require_access_token
from app.domains.attributes.usecases import (
    add_variant,
    create_group,
    delete_group,
    get_group,
    list_groups,
    remove_variant,
    update_group,
    update_variant,
)
from app.infra.uow import UoW
from app.schemas.attribute_groups import (
    AttributeGroupIn,
    AttributeGroupOut,
    AttributeGroupUpdateIn,
    VariantIn,
    VariantUpdateIn,
)

router = APIRouter(prefix="/attribute-groups", tags=["attribute-groups"])
UserDep = Annotated[dict, Depends(require_access_token)]
UowDep = Annotated[UoW, Depends(get_uow)]


@router.get("", response_model=list[AttributeGroupOut], summary="Listar grupos de atributos")
def list_attribute_groups(_user: UserDep, uow: UowDep):
    return list_groups.execute(uow)


@router.get("/{key}", response_model=AttributeGroupOut, summary="Obter grupo por key")
def get_attribute_group(_user: UserDep, uow: UowDep, key: str):
    return get_group.execute(uow, key=key)


@router.post(
    "", response_model=AttributeGroupOut, status_code=201, summary="Criar grupo de atributos"
)
def create_attribute_group(_user: UserDep, uow: UowDep, payload: AttributeGroupIn):
    return create_group.execute(uow, payload=payload)


@router.patch("/{id_group}", response_model=AttributeGroupOut, summary="Atualizar grupo")
def update_attribute_group(
    _user: UserDep, uow: UowDep, id_group: int, payload: AttributeGroupUpdateIn
):
    return update_group.execute(uow, id_group=id_group, key=payload.key, name=payload.name)


@router.delete("/{id_group}", status_code=204, summary="Apagar grupo")
def delete_attribute_group(_user: UserDep, uow: UowDep, id_group: int):
    delete_group.execute(uow, id_group=id_group)
    return Response(status_code=204)


@router.post(
    "/{id_group}/variants",
    response_model=AttributeGroupOut,
    status_code=201,
    summary="Adicionar variante",
)
def add_group_variant(_user: UserDep, uow: UowDep, id_group: int, payload: VariantIn):
    return add_variant.execute(uow, id_group=id_group, value=payload.value, label=payload.label)


@router.patch(
    "/{id_group}/variants/{value}", response_model=AttributeGroupOut, summary="Atualizar variante"
)
def update_group_variant(
    _user: UserDep, uow: UowDep, id_group: int, value: str, payload: VariantUpdateIn
):
    return update_variant.execute(
        uow,
        id_group=id_group,
        variant_value=value,
        new_value=payload.value,
        new_label=payload.label,
        active=payload.active,
    )


@router.delete(
    "/{id_group}/variants/{value}", response_model=AttributeGroupOut, summary="Remover variante"
)
def remove_group_variant(_user: UserDep, uow: UowDep, id_group: int, value: str):
    return remove_variant.execute(uow, id_group=id_group, variant_value=value)
