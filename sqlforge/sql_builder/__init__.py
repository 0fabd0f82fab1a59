"""SQL Builder subpackage for generating SQL statements and parameters."""

from .query_builder import SQLBuilder, Query, QueryType, Issue, StatementError
from .conditions import Predicate, JoinSpec, JoinType
from .placeholders import ParamStyle, placeholder
from .identifiers import safe_identifier, strict_identifier, strip_keywords, is_safe_identifier
from .clauses import build_where, build_joins
from .df_handler import df_sql
from .json_handler import json_select, json_insert, json_update, json_delete
from .adapt_sql import adapt_sql, to_text

__all__ = [
    'SQLBuilder',
    'Query',
    'QueryType',
    'Issue',
    'StatementError',
    'Predicate',
    'JoinSpec',
    'JoinType',
    'ParamStyle',
    'placeholder',
    'safe_identifier',
    'strict_identifier',
    'strip_keywords',
    'is_safe_identifier',
    'build_where',
    'build_joins',
    'df_sql',
    'json_select',
    'json_insert',
    'json_update',
    'json_delete',
    'adapt_sql',
    'to_text'
]
