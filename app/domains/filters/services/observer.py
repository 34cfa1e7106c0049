# app/domains/filters/services/observer.py
"""
Observadores do compilador de filtros.

O compilador não escreve logs: reporta para um observer injetado. Isto
mantém compile_profile_query puro nos testes e dá um ponto único para
contar facets desconhecidas (que hoje são ignoradas em silêncio).
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domains.filters.services.query_compiler import CompiledProfileQuery

log = logging.getLogger("pfl.filters.compiler")

# keys distintas contadas antes de agrupar o resto em OTHER_KEY
MAX_TRACKED_KEYS = 100
OTHER_KEY = "<other>"


class CompileObserver(Protocol):
    def facet_unresolved(self, key: str) -> None: ...

    def compiled(self, query: CompiledProfileQuery) -> None: ...


class LoggingCompileObserver:
    """
    Regista facets não resolvidas e mantém contagem por key. Thread-safe.

    As keys vêm do cliente, por isso a contagem é limitada: a partir de
    max_keys keys distintas, as novas somam em OTHER_KEY.
    """

    def __init__(self, logger: logging.Logger | None = None, *, max_keys: int = MAX_TRACKED_KEYS):
        self._log = logger or log
        self._lock = threading.Lock()
        self._max_keys = max_keys
        self._unresolved: Counter[str] = Counter()

    def facet_unresolved(self, key: str) -> None:
        with self._lock:
            bucket = key
            if key not in self._unresolved and len(self._unresolved) >= self._max_keys:
                bucket = OTHER_KEY
            self._unresolved[bucket] += 1
            seen = self._unresolved[bucket]
        self._log.warning("Unknown facet key %r ignored (seen %d time(s))", key, seen)

    def compiled(self, query: CompiledProfileQuery) -> None:
        self._log.debug(
            "Compiled profile query: %d condition(s), %d conjunct(s), skipped=%s",
            len(query.conditions),
            len(query.conjuncts),
            list(query.skipped_facets) or "-",
        )

    def unresolved_counts(self) -> dict[str, int]:
        with self._lock:
            return dict(self._unresolved)


class RecordingCompileObserver:
    """Guarda tudo o que recebe; útil em testes e em debugging."""

    def __init__(self) -> None:
        self.unresolved: list[str] = []
        self.queries: list[CompiledProfileQuery] = []

    def facet_unresolved(self, key: str) -> None:
        self.unresolved.append(key)

    def compiled(self, query: CompiledProfileQuery) -> None:
        self.queries.append(query)


default_observer = LoggingCompileObserver()
