"""Clause-level SQL builders.

Each function renders exactly one clause of the rule statement from a
slice of the wizard snapshot and returns it as a string.  An empty string
means "omit this clause"; the generator drops those.  None of the builders
raise - input they cannot use is skipped and, when a ``RuntimeContext`` is
supplied, reported as a warning.

Functions
---------
build_select_clause    - ``SELECT <columns>[, meta(topic) ..., event_time() ...]``
build_from_clause      - ``FROM <source> [AS <alias>]``
build_join_clause      - ``<TYPE> JOIN <source> [AS <alias>] [ON ...]`` (all joins)
build_where_clause     - ``WHERE (<group>) AND|OR (<group>) ...``
build_group_by_clause  - ``GROUP BY <fields>[, <Window>(unit, length[, interval])]``
"""
from __future__ import annotations

from typing import Any

from kuiperql.compile.context import CompilationContext, RuntimeContext
from kuiperql.compile.formatters import (
    cast_expression,
    format_identifier,
    format_value,
    map_window_type,
    starts_quoted,
    strip_quotes,
)
from kuiperql.compile.heuristics import coerce_payload_comparisons
from kuiperql.schema.wizard_state import (
    AggregateConfig,
    FilterConfig,
    FilterExpression,
    JoinConfig,
    SelectionConfig,
    SourceConfig,
)

_DEFAULT_CTX = CompilationContext()


# ---------------------------------------------------------------------------
# SELECT
# ---------------------------------------------------------------------------


def build_select_clause(
    sources: list[SourceConfig],
    source_schemas: dict[str, Any],
    selections: list[SelectionConfig],
    ctx: CompilationContext = _DEFAULT_CTX,
    runtime: RuntimeContext | None = None,
) -> str:
    """Build the projection.

    Explicit ``selections`` own the whole column list.  Without them the
    known schema of the main source is listed (or ``*``), and stream sources
    get the topic and event-time metadata columns appended.
    """
    runtime = runtime or RuntimeContext()
    config = ctx.config

    if selections:
        columns = [
            column
            for column in (_build_selection(s, ctx, runtime) for s in selections)
            if column
        ]
        return f"SELECT {', '.join(columns)}" if columns else "SELECT *"

    main = sources[0] if sources else None
    columns = ["*"]
    if main is not None:
        schema = source_schemas.get(main.resource_name)
        if isinstance(schema, dict) and schema:
            columns = [format_identifier(str(name), config) for name in schema]

    if main is not None and main.is_stream and config.enrich_streams:
        columns.extend(config.metadata_fields)
    return f"SELECT {', '.join(columns)}"


def _build_selection(
    selection: SelectionConfig,
    ctx: CompilationContext,
    runtime: RuntimeContext,
) -> str:
    column = format_identifier(selection.field, ctx.config)
    if not column:
        runtime.warn("selection with an empty field was dropped")
        return ""
    alias = format_identifier(selection.alias, ctx.config)
    if alias:
        return f"{column} AS {alias}"
    return column


# ---------------------------------------------------------------------------
# FROM / JOIN
# ---------------------------------------------------------------------------


def build_from_clause(
    sources: list[SourceConfig],
    ctx: CompilationContext = _DEFAULT_CTX,
    runtime: RuntimeContext | None = None,
) -> str:
    """Build ``FROM`` for the main (first) source."""
    runtime = runtime or RuntimeContext()
    if not sources:
        return ""
    target = _source_reference(sources[0], ctx)
    if not target:
        runtime.warn("main source has no resource name; FROM was omitted")
        return ""
    return f"FROM {target}"


def build_join_clause(
    sources: list[SourceConfig],
    joins: list[JoinConfig],
    ctx: CompilationContext = _DEFAULT_CTX,
    runtime: RuntimeContext | None = None,
) -> str:
    """Build every JOIN, in declaration order, as one space-joined fragment.

    Joins whose target source id does not resolve are skipped.
    """
    runtime = runtime or RuntimeContext()
    by_id = {source.id: source for source in reversed(sources)}
    fragments: list[str] = []
    for join in joins:
        target = by_id.get(join.target_source_id)
        if target is None:
            runtime.warn(
                f"join target '{join.target_source_id}' does not match any source; "
                "join skipped"
            )
            continue
        if not target.resource_name.strip():
            runtime.warn(f"join target '{target.id}' has no resource name; join skipped")
            continue
        fragments.append(_build_join(join, target, ctx, runtime))
    return " ".join(fragments)


def _build_join(
    join: JoinConfig,
    target: SourceConfig,
    ctx: CompilationContext,
    runtime: RuntimeContext,
) -> str:
    config = ctx.config
    sql = f"{join.join_type} JOIN {_source_reference(target, ctx)}"

    terms: list[str] = []
    for cond in join.conditions:
        if not cond.left_field or not cond.right_field:
            runtime.warn(f"join condition on '{target.resource_name}' is incomplete")
            continue
        left = format_identifier(cond.left_field, config)
        right = format_identifier(cond.right_field, config)
        terms.append(f"{left} {cond.operator} {right}")

    if terms:
        sql += f" ON {' AND '.join(terms)}"
    return sql


def _source_reference(source: SourceConfig, ctx: CompilationContext) -> str:
    name = format_identifier(source.resource_name, ctx.config)
    if not name:
        return ""
    alias = format_identifier(source.alias, ctx.config)
    return f"{name} AS {alias}" if alias else name


# ---------------------------------------------------------------------------
# WHERE
# ---------------------------------------------------------------------------


def build_where_clause(
    filters: list[FilterConfig],
    ctx: CompilationContext = _DEFAULT_CTX,
    runtime: RuntimeContext | None = None,
) -> str:
    """Build ``WHERE`` from the filter groups.

    The groups are assembled first; :func:`coerce_payload_comparisons` then
    runs as a separate pass over the assembled condition.
    """
    condition = assemble_filter_groups(filters, ctx, runtime)
    if not condition:
        return ""
    return f"WHERE {coerce_payload_comparisons(condition)}"


def assemble_filter_groups(
    filters: list[FilterConfig],
    ctx: CompilationContext = _DEFAULT_CTX,
    runtime: RuntimeContext | None = None,
) -> str:
    """Join the parenthesized groups with their connectives.

    The first surviving group contributes only ``(<exprs>)``; every later one
    is prefixed by `` <logic> ``.
    """
    runtime = runtime or RuntimeContext()
    condition = ""
    for index, group in enumerate(filters):
        exprs = [
            sql
            for sql in (build_filter_expression(e, ctx, runtime) for e in group.expressions)
            if sql
        ]
        if not exprs:
            runtime.warn(f"filter group {index + 1} has no usable expressions; dropped")
            continue
        body = f"({' AND '.join(exprs)})"
        condition = f"{condition} {group.logic} {body}" if condition else body
    return condition


def build_filter_expression(
    expr: FilterExpression,
    ctx: CompilationContext = _DEFAULT_CTX,
    runtime: RuntimeContext | None = None,
) -> str:
    """Render ``<field> <op> <value>`` with the expression's cast policy.

    ``number`` casts the field to float and unquotes the value; ``string``
    casts the field to string (unless it is already a cast) and quotes the
    value.  ``auto`` leaves both as formatted.
    """
    runtime = runtime or RuntimeContext()
    field = format_identifier(expr.field, ctx.config)
    if not field:
        runtime.warn("filter expression with an empty field was dropped")
        return ""
    value = format_value(expr.value)

    if expr.cast_type == "number":
        field = cast_expression(field, "float")
        if starts_quoted(value):
            value = strip_quotes(value)
    elif expr.cast_type == "string":
        if "CAST" not in field:
            field = cast_expression(field, "string")
        if not starts_quoted(value):
            value = f"'{value}'"

    return f"{field} {expr.operator} {value}"


# ---------------------------------------------------------------------------
# GROUP BY
# ---------------------------------------------------------------------------


def build_group_by_clause(
    aggregation: AggregateConfig,
    ctx: CompilationContext = _DEFAULT_CTX,
    runtime: RuntimeContext | None = None,
) -> str:
    """Build ``GROUP BY`` when aggregation is enabled.

    A configured window is appended as ``<Window>(unit, length[, interval])``;
    a missing unit or length falls back to the configured defaults.
    """
    runtime = runtime or RuntimeContext()
    if not aggregation.enabled:
        return ""

    terms = [
        term
        for term in (format_identifier(f, ctx.config) for f in aggregation.group_by_fields)
        if term
    ]
    if aggregation.window_type:
        terms.append(build_window_term(aggregation, ctx, runtime))

    if not terms:
        return ""
    return f"GROUP BY {', '.join(terms)}"


def build_window_term(
    aggregation: AggregateConfig,
    ctx: CompilationContext = _DEFAULT_CTX,
    runtime: RuntimeContext | None = None,
) -> str:
    runtime = runtime or RuntimeContext()
    config = ctx.config
    unit = _window_arg(aggregation.window_unit)
    length = _window_arg(aggregation.window_length)
    if not unit or not length:
        runtime.warn("window unit or length not set; defaults applied")

    args = [unit or config.default_window_unit, length or config.default_window_length]
    interval = _window_arg(aggregation.window_interval)
    if interval:
        args.append(interval)
    return f"{map_window_type(aggregation.window_type)}({', '.join(args)})"


def _window_arg(value: int | float | str | None) -> str:
    # Zero and blank count as unset.
    if not value:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()
