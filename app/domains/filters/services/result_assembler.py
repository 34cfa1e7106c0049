# app/domains/filters/services/result_assembler.py
"""
Montagem da resposta paginada: serialização dos perfis (só os campos
pedidos) e metadados de paginação.
"""

from __future__ import annotations

import math
from typing import Any

from app.domains.filters.services.pagination import PagePlan
from app.models.profile import Profile
from app.models.profile_verification import ProfileVerification
from app.schemas.filters import ProfilePageOut


def verification_summary(v: ProfileVerification | None) -> dict[str, Any]:
    """
    verified: todos os passos verificados; partial: algum; pending: nenhum.
    """
    if v is None:
        return {"isVerified": False, "verificationLevel": "pending"}
    steps = v.steps()
    done = sum(1 for ok in steps.values() if ok)
    if steps and done == len(steps):
        return {"isVerified": True, "verificationLevel": "verified"}
    if done > 0:
        return {"isVerified": False, "verificationLevel": "partial"}
    return {"isVerified": False, "verificationLevel": "pending"}


def _labeled(value: str | None, label: str | None) -> dict[str, Any] | None:
    if value is None and label is None:
        return None
    return {"value": value, "label": label}


def _media(p: Profile) -> dict[str, Any]:
    out: dict[str, Any] = {"gallery": [], "videos": [], "audios": []}
    for m in p.media:
        if m.kind == "video":
            out["videos"].append({"link": m.link, "preview": m.preview})
        elif m.kind == "audio":
            out["audios"].append(m.link)
        else:
            out["gallery"].append(m.link)
    return out


def _features(p: Profile) -> list[dict[str, Any]]:
    out = []
    for f in p.features:
        group = f.group
        out.append(
            {
                "groupId": f.group_id,
                "groupKey": group.key if group else None,
                "groupName": group.name if group else None,
                "value": f.value,
            }
        )
    return out


def serialize_profile(p: Profile, fields: tuple[str, ...]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for field in fields:
        if field == "id":
            out["id"] = p.id
        elif field == "name":
            out["name"] = p.name
        elif field == "age":
            out["age"] = p.age
        elif field == "description":
            out["description"] = p.description
        elif field == "isActive":
            out["isActive"] = p.is_active
        elif field == "location":
            out["location"] = {
                "country": p.country,
                "department": _labeled(p.department_value, p.department_label),
                "city": _labeled(p.city_value, p.city_label),
            }
        elif field == "createdAt":
            out["createdAt"] = p.created_at.isoformat() if p.created_at else None
        elif field == "updatedAt":
            out["updatedAt"] = p.updated_at.isoformat() if p.updated_at else None
        elif field == "userId":
            out["userId"] = p.user_id
        elif field == "verification":
            out["verification"] = verification_summary(p.verification)
        elif field == "media":
            out["media"] = _media(p)
        elif field == "rates":
            out["rates"] = [
                {"hour": r.hour, "price": r.price, "delivery": r.delivery} for r in p.rates
            ]
        elif field == "availability":
            out["availability"] = [
                {
                    "dayOfWeek": a.day_of_week,
                    "slots": [
                        {"start": s.start, "end": s.end, "timezone": s.timezone} for s in a.slots
                    ],
                }
                for a in p.availability
            ]
        elif field == "features":
            out["features"] = _features(p)
    return out


def assemble_page(rows: list[dict[str, Any]], total_count: int, plan: PagePlan) -> ProfilePageOut:
    total_pages = math.ceil(total_count / plan.limit) if total_count else 0
    return ProfilePageOut(
        profiles=rows,
        current_page=plan.page,
        total_pages=total_pages,
        total_count=total_count,
        has_next_page=plan.page < total_pages,
        has_prev_page=plan.page > 1,
        limit=plan.limit,
    )
