"""kuiperQL compilation layer: WizardState → rule SQL."""
from kuiperql.compile.base import CompiledRule
from kuiperql.compile.builder import RuleBuilder, compile_rule, generate
from kuiperql.compile.formatters import format_identifier, format_value, map_window_type
from kuiperql.compile.heuristics import coerce_payload_comparisons

__all__ = [
    "CompiledRule",
    "RuleBuilder",
    "compile_rule",
    "generate",
    "format_identifier",
    "format_value",
    "map_window_type",
    "coerce_payload_comparisons",
]
