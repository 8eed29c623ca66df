#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import threading

from mc_types import Type, short_code


class IdGenerator:
    """
    Mints globally unique identifiers for the stages that run after parsing.

    One generator is owned by each CompilationContext; the counter is shared by
    every name it produces, whatever the prefix.
    """

    def __init__(self, start: int = 0) -> None:
        self._counter = start
        self._lock = threading.Lock()

    @property
    def counter(self) -> int:
        return self._counter

    def _next(self) -> int:
        with self._lock:
            self._counter += 1
            return self._counter

    def gen_id(self, prefix: str) -> str:
        """Return a fresh name of the form `prefix.N`."""
        return f"{prefix}.{self._next()}"

    def gen_temp(self, t: Type) -> str:
        """Return a fresh temporary name tagged with the one-letter code of `t`."""
        return f"T{short_code(t)}{self._next()}"
