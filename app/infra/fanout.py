# app/infra/fanout.py
"""
Fan-out/fan-in de leituras independentes.

Cada tarefa recebe a sua própria Session (uma Session SQLAlchemy não pode
ser usada por duas threads ao mesmo tempo). Sem session factory, as tarefas
correm em sequência na sessão do pedido.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from sqlalchemy.orm import Session

from app.infra.uow import UoW

log = logging.getLogger(__name__)

ReadTask = Callable[[Session], Any]


def _run_isolated(factory: Callable[[], Session], task: ReadTask) -> Any:
    with factory() as db:
        return task(db)


def run_parallel(uow: UoW, *tasks: ReadTask, parallel: bool = True) -> list[Any]:
    """
    Executa as tarefas e devolve os resultados pela mesma ordem.

    A primeira exceção é propagada tal como está: não há resultados parciais.
    """
    if not tasks:
        return []

    factory = uow.session_factory
    if not parallel or factory is None or len(tasks) == 1:
        return [task(uow.db) for task in tasks]

    log.debug("Fan-out of %d read tasks", len(tasks))
    with ThreadPoolExecutor(max_workers=len(tasks)) as pool:
        futures = [pool.submit(_run_isolated, factory, task) for task in tasks]
        return [f.result() for f in futures]
