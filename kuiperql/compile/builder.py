"""Wizard snapshot → rule SQL generation.

``RuleBuilder`` is the top-level orchestrator.  It runs the clause builders
of :mod:`kuiperql.compile.clause_builders` in a fixed order, drops clauses
that come back empty, and joins the rest into one statement::

    SELECT ...
    FROM ...
    <joins>
    WHERE ...
    GROUP BY ...;

Generation is pure: no I/O, no state kept between calls, and the same
snapshot always yields the same text.  It never raises - the preview pane
calls it on every keystroke, and a wizard without a source yields the
configured sentinel instead of SQL.
"""
from __future__ import annotations

import logging
from collections.abc import Callable

from kuiperql.compile.base import CompiledRule
from kuiperql.compile.clause_builders import (
    build_from_clause,
    build_group_by_clause,
    build_join_clause,
    build_select_clause,
    build_where_clause,
)
from kuiperql.compile.context import CompilationContext, RuntimeContext
from kuiperql.schema.config import GeneratorConfig
from kuiperql.schema.wizard_state import WizardState

logger = logging.getLogger(__name__)

#: ``(state, ctx, runtime) -> clause``
ClauseStep = Callable[[WizardState, CompilationContext, RuntimeContext], str]

CLAUSE_PIPELINE: tuple[ClauseStep, ...] = (
    lambda s, ctx, rt: build_select_clause(
        s.sources, s.source_schemas, s.selections, ctx, rt
    ),
    lambda s, ctx, rt: build_from_clause(s.sources, ctx, rt),
    lambda s, ctx, rt: build_join_clause(s.sources, s.joins, ctx, rt),
    lambda s, ctx, rt: build_where_clause(s.filters, ctx, rt),
    lambda s, ctx, rt: build_group_by_clause(s.aggregation, ctx, rt),
)


class RuleBuilder:
    """Compiles a :class:`WizardState` into rule SQL.

    Args:
        config: Dialect conventions; defaults to ``GeneratorConfig()``.
    """

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        self._ctx = CompilationContext(config=config or GeneratorConfig())

    def build(self, state: WizardState) -> CompiledRule:
        """Generate the rule statement for ``state``.

        Returns:
            :class:`~kuiperql.compile.base.CompiledRule` with the SQL text
            and any warnings about input that was dropped.
        """
        if state.main_source is None:
            return CompiledRule(sql=self._ctx.config.empty_sentinel)

        runtime = RuntimeContext()
        clauses = [step(state, self._ctx, runtime) for step in CLAUSE_PIPELINE]
        sql = "\n".join(c for c in clauses if c.strip()).strip() + ";"

        logger.debug("generated rule SQL (%d warnings): %s", len(runtime.warnings), sql)
        return CompiledRule(sql=sql, warnings=tuple(runtime.warnings))


def compile_rule(
    state: WizardState, config: GeneratorConfig | None = None
) -> CompiledRule:
    """Generate the rule statement together with its warnings."""
    return RuleBuilder(config).build(state)


def generate(state: WizardState, config: GeneratorConfig | None = None) -> str:
    """Generate the rule SQL text for ``state``.

    Returns the statement terminated by ``;``, or the empty-source sentinel
    when ``state.sources`` is empty.
    """
    return compile_rule(state, config).sql
