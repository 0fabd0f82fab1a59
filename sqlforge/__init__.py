"""SQL statement assembly with bound parameters."""

from .config import BUILDER_CONFIG, load_config, configure_logging
from .sql_builder import (
    SQLBuilder, Query, QueryType, Issue, StatementError, Predicate, JoinSpec,
    JoinType, ParamStyle, placeholder, safe_identifier, strict_identifier,
    strip_keywords, is_safe_identifier, build_where, build_joins, df_sql,
    json_select, json_insert, json_update, json_delete, adapt_sql, to_text
)

__version__ = '0.1.0'

__all__ = [
    'BUILDER_CONFIG', 'load_config', 'configure_logging',
    'SQLBuilder', 'Query', 'QueryType', 'Issue', 'StatementError', 'Predicate',
    'JoinSpec', 'JoinType', 'ParamStyle', 'placeholder', 'safe_identifier',
    'strict_identifier', 'strip_keywords', 'is_safe_identifier', 'build_where',
    'build_joins', 'df_sql', 'json_select', 'json_insert', 'json_update',
    'json_delete', 'adapt_sql', 'to_text'
]
