# app/api/v1/filters.py
"""
API endpoints de pesquisa de perfis (públicos, sem autenticação).
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request

from app.core.deps import get_uow
from app.domains.filters.services.spec_normalizer import query_params_to_payload
from app.domains.filters.usecases import count_profiles, filter_profiles, get_filter_options
from app.infra.uow import UoW
from app.schemas.filters import (
    FilterOptionsResponse,
    ProfileCountResponse,
    ProfilePageResponse,
)

router = APIRouter(prefix="/filters", tags=["filters"])
UowDep = Annotated[UoW, Depends(get_uow)]


@router.post("/profiles", response_model=ProfilePageResponse, summary="Pesquisar perfis")
def search_profiles(uow: UowDep, payload: Annotated[Any, Body()] = None):
    """
    Lista perfis que satisfazem os filtros, paginados e projetados.
    """
    page = filter_profiles.execute(uow, payload)
    return ProfilePageResponse(data=page)


@router.get("/profiles", response_model=ProfilePageResponse, summary="Pesquisar perfis (query string)")
def search_profiles_query(request: Request, uow: UowDep):
    """
    Mesma pesquisa do POST, com os filtros em query string.
    `features` vai como JSON (ex.: features={"hairColor":["rubio"]}).
    """
    payload = query_params_to_payload(request.query_params)
    page = filter_profiles.execute(uow, payload)
    return ProfilePageResponse(data=page)


@router.post("/profiles/count", response_model=ProfileCountResponse, summary="Contar perfis")
def count_matching_profiles(uow: UowDep, payload: Annotated[Any, Body()] = None):
    """
    Conta os perfis que satisfazem os filtros. Paginação, ordenação e
    projeção são ignoradas.
    """
    result = count_profiles.execute(uow, payload)
    return ProfileCountResponse(data=result)


@router.get("/options", response_model=FilterOptionsResponse, summary="Opções de filtro")
def list_filter_options(uow: UowDep):
    return FilterOptionsResponse(data=get_filter_options.execute(uow))
