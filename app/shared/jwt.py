# app/shared/jwt.py
"""
Validação de tokens emitidos pelo serviço de autenticação.
"""

from __future__ import annotations

from typing import Any

import jwt

from app.core.config import settings


def decode_token(token: str, *, expected_typ: str = "access") -> dict[str, Any]:
    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    typ = payload.get("typ")
    if typ != expected_typ:
        raise jwt.InvalidTokenError(f"Unexpected token type: {typ!r}")
    return payload
