"""WHERE and JOIN clause composition."""

from typing import Any, List, Sequence, Tuple

from .conditions import JoinSpec, Predicate
from .identifiers import safe_identifier, strip_keywords
from .placeholders import ParamStyle, placeholder


def build_where(predicates: Sequence[Predicate], style: ParamStyle,
                count: int = 0) -> Tuple[str, List[Any], int]:
    """
    Build the WHERE clause, numbering placeholders after ``count``.

    Args:
        predicates: Predicates in declaration order
        style: Placeholder style
        count: Number of placeholders already emitted by earlier clauses

    Returns:
        Tuple of (clause text, bound values, final placeholder count)
    """
    if not predicates:
        return '', [], count
    parts = [' where ']
    params = []
    for i, p in enumerate(predicates):
        if i > 0:
            parts.append(f' {p.joiner} ')
        count += 1
        parts.append(f'{safe_identifier(p.column)} {strip_keywords(p.op)} {placeholder(count, style)}')
        params.append(p.value)
    return ''.join(parts), params, count


def build_joins(joins: Sequence[JoinSpec]) -> str:
    """Build JOIN clauses in declaration order; joins never bind parameters."""
    parts = []
    for j in joins:
        parts.append(f' {j.kind.value} {safe_identifier(j.table)}')
        if j.alias:
            parts.append(f' as {safe_identifier(j.alias)}')
        parts.append(f' on {strip_keywords(j.condition)}')
    return ''.join(parts)
