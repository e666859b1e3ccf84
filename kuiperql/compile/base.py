"""Compilation result object."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CompiledRule:
    """The output of one generation run.

    Attributes:
        sql: The rule SQL statement, terminated by ``;``, or the empty-source
            sentinel.
        warnings: Non-fatal notes about wizard input that was dropped while
            building the statement (unresolved join targets, blank fields).
            Warnings never change ``sql``.
    """

    sql: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        """True when nothing was dropped from the wizard input."""
        return not self.warnings

    def __str__(self) -> str:
        return self.sql
