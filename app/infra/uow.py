# app/infra/uow.py
# Unit of Work simples para SQLAlchemy

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.orm import Session


class UoW:
    def __init__(
        self,
        db_session: Session,
        session_factory: Callable[[], Session] | None = None,
    ) -> None:
        self.db = db_session
        # usado para abrir sessões paralelas de leitura (ver app.infra.fanout)
        self.session_factory = session_factory
        self._committed = False  # mantemos só para o __exit__

    def commit(self) -> None:
        self.db.commit()
        self._committed = True

    def rollback(self) -> None:
        self.db.rollback()
        self._committed = True

    def __enter__(self) -> UoW:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc or not self._committed:
            self.rollback()
