# app/core/errors.py
from __future__ import annotations


class AppError(Exception):
    code = "app_error"
    http_status = 500

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.code
        super().__init__(self.detail)

    def payload(self) -> dict:
        return {"success": False, "code": self.code, "message": self.detail}


class InvalidArgument(AppError):
    """Input do cliente mal formado. Nunca deve ser repetido sem correção."""

    code = "invalid_argument"
    http_status = 400

    def __init__(self, detail: str | None = None, *, field: str | None = None) -> None:
        super().__init__(detail)
        self.field = field

    def payload(self) -> dict:
        body = super().payload()
        if self.field:
            body["field"] = self.field
        return body


class Unauthorized(AppError):
    code = "unauthorized"
    http_status = 401


class NotFound(AppError):
    code = "not_found"
    http_status = 404


class Conflict(AppError):
    code = "conflict"
    http_status = 409


class StoreError(AppError):
    """Falha do store (base de dados inacessível ou query inválida)."""

    code = "store_error"
    http_status = 500
