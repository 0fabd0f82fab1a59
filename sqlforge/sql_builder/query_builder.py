"""Fluent SQL statement builder for SELECT, INSERT, UPDATE and DELETE."""

from enum import Enum
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple, Union
import logging

from ..config import BUILDER_CONFIG
from .clauses import build_joins, build_where
from .conditions import JoinSpec, JoinType, Predicate
from .identifiers import is_safe_identifier, safe_identifier
from .mappings import valid_operators
from .placeholders import ParamStyle, placeholder

logger = logging.getLogger(__name__)


class QueryType(Enum):
    SELECT = 'select'
    INSERT = 'insert'
    UPDATE = 'update'
    DELETE = 'delete'


class Query(NamedTuple):
    """Rendered statement and its positional parameters."""
    sql: str
    params: Tuple[Any, ...]


class Issue(Enum):
    """Structural problems reported by SQLBuilder.validate()."""
    MISSING_TABLE = 'no table declared'
    NEGATIVE_LIMIT = 'limit is negative'
    NEGATIVE_OFFSET = 'offset is negative'
    INSERT_WITHOUT_COLUMNS = 'insert values declared without columns'
    INSERT_COUNT_MISMATCH = 'insert column and value counts differ'
    EMPTY_UPDATE = 'update has no assignments'
    WHERE_ON_INSERT = 'where clause is ignored on insert'
    JOIN_IGNORED = 'joins are only rendered for select'
    OFFSET_IGNORED = 'offset is not rendered for update or delete'
    UNKNOWN_OPERATOR = 'predicate operator is not recognised'
    SANITIZED_IDENTIFIER = 'an identifier will be rewritten by sanitization'


class StatementError(ValueError):
    """Raised by a strict build when validation finds problems."""
    def __init__(self, issues: List[Issue]):
        self.issues = issues
        super().__init__('Invalid statement: ' + ', '.join(i.name for i in issues))


class SQLBuilder:
    """
    Accumulates statement declarations and renders them on build().

    Every declaration returns the builder, so calls chain:

        >>> q = SQLBuilder().table('users').select('id', 'name').where('age', '>', 18).build()
        >>> q.sql
        'select id, name from users where age > $1'
        >>> q.params
        (18,)

    Declarations never raise; malformed input renders as-is. Use validate()
    or build(strict=True) to surface structural problems.
    """
    def __init__(self, param_style: Union[ParamStyle, str, None] = None):
        """Initialize with default state: select *, no clauses."""
        self._kind = QueryType.SELECT
        self._table = ''
        self._alias = ''
        self._columns = ['*']
        self._predicates: List[Predicate] = []
        self._joins: List[JoinSpec] = []
        self._order = ''
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None
        self._style = ParamStyle.coerce(param_style or BUILDER_CONFIG['param_style'])
        self._insert_columns: List[str] = []
        self._insert_values: List[Any] = []
        self._update_columns: List[str] = []
        self._update_values: List[Any] = []

    @property
    def kind(self) -> QueryType:
        return self._kind

    def param_style(self, style: Union[ParamStyle, str]) -> 'SQLBuilder':
        self._style = ParamStyle.coerce(style)
        return self

    def table(self, name: str) -> 'SQLBuilder':
        self._table = name
        return self

    def alias(self, alias: str) -> 'SQLBuilder':
        """Alias the target table in FROM position."""
        self._alias = alias
        return self

    def select(self, *columns: str) -> 'SQLBuilder':
        """Switch to SELECT; replace the projection when columns are given."""
        self._kind = QueryType.SELECT
        if columns:
            self._columns = list(columns)
        return self

    def insert(self, data: Dict[str, Any]) -> 'SQLBuilder':
        """Switch to INSERT with columns and values taken from ``data`` in its order."""
        self._kind = QueryType.INSERT
        self._insert_columns = list(data.keys())
        self._insert_values = list(data.values())
        return self

    def insert_columns(self, *columns: str) -> 'SQLBuilder':
        self._kind = QueryType.INSERT
        self._insert_columns = list(columns)
        return self

    def values(self, *values: Any) -> 'SQLBuilder':
        self._insert_values = list(values)
        return self

    def update(self, data: Dict[str, Any]) -> 'SQLBuilder':
        """Switch to UPDATE, replacing assignments with those in ``data``."""
        self._kind = QueryType.UPDATE
        self._update_columns = list(data.keys())
        self._update_values = list(data.values())
        return self

    def set(self, column: str, value: Any) -> 'SQLBuilder':
        """Switch to UPDATE and append one assignment."""
        self._kind = QueryType.UPDATE
        self._update_columns.append(column)
        self._update_values.append(value)
        return self

    def delete(self) -> 'SQLBuilder':
        self._kind = QueryType.DELETE
        return self

    def where(self, column: str, operator: str, value: Any) -> 'SQLBuilder':
        self._predicates.append(Predicate(column, operator, value, 'and'))
        return self

    def or_where(self, column: str, operator: str, value: Any) -> 'SQLBuilder':
        self._predicates.append(Predicate(column, operator, value, 'or'))
        return self

    def filter_by(self, conditions: Iterable[Any]) -> 'SQLBuilder':
        """Append predicates from Predicate objects, dicts, tuples or condition strings."""
        if isinstance(conditions, (str, dict, tuple, Predicate)):
            conditions = [conditions]
        self._predicates.extend(Predicate.from_input(c) for c in conditions)
        return self

    def order_by(self, order: str) -> 'SQLBuilder':
        self._order = order
        return self

    def limit(self, limit: int) -> 'SQLBuilder':
        self._limit = limit
        return self

    def offset(self, offset: int) -> 'SQLBuilder':
        self._offset = offset
        return self

    def add_join(self, kind: JoinType, table: str, condition: str, alias: str = '') -> 'SQLBuilder':
        self._joins.append(JoinSpec(kind, table, condition, alias))
        return self

    def join(self, table: str, condition: str) -> 'SQLBuilder':
        return self.add_join(JoinType.JOIN, table, condition)

    def left_join(self, table: str, condition: str) -> 'SQLBuilder':
        return self.add_join(JoinType.LEFT, table, condition)

    def right_join(self, table: str, condition: str) -> 'SQLBuilder':
        return self.add_join(JoinType.RIGHT, table, condition)

    def inner_join(self, table: str, condition: str) -> 'SQLBuilder':
        return self.add_join(JoinType.INNER, table, condition)

    def full_join(self, table: str, condition: str) -> 'SQLBuilder':
        return self.add_join(JoinType.FULL, table, condition)

    def join_as(self, table: str, alias: str, condition: str) -> 'SQLBuilder':
        return self.add_join(JoinType.JOIN, table, condition, alias)

    def left_join_as(self, table: str, alias: str, condition: str) -> 'SQLBuilder':
        return self.add_join(JoinType.LEFT, table, condition, alias)

    def right_join_as(self, table: str, alias: str, condition: str) -> 'SQLBuilder':
        return self.add_join(JoinType.RIGHT, table, condition, alias)

    def inner_join_as(self, table: str, alias: str, condition: str) -> 'SQLBuilder':
        return self.add_join(JoinType.INNER, table, condition, alias)

    def full_join_as(self, table: str, alias: str, condition: str) -> 'SQLBuilder':
        return self.add_join(JoinType.FULL, table, condition, alias)

    def _identifiers(self) -> List[str]:
        """Names that end up in identifier positions for the current kind."""
        names = [self._table] + [p.column for p in self._predicates if self._kind is not QueryType.INSERT]
        if self._order and self._kind is not QueryType.INSERT:
            names.append(self._order)
        if self._kind is QueryType.SELECT:
            names += self._columns
            names += [self._alias] if self._alias else []
            for j in self._joins:
                names += [j.table, j.alias] if j.alias else [j.table]
        elif self._kind is QueryType.INSERT:
            names += self._insert_columns
        elif self._kind is QueryType.UPDATE:
            names += self._update_columns
        return names

    def validate(self) -> List[Issue]:
        """Report structural problems; the builder renders regardless."""
        found = set()
        kind = self._kind
        if not self._table:
            found.add(Issue.MISSING_TABLE)
        if self._limit is not None and self._limit < 0:
            found.add(Issue.NEGATIVE_LIMIT)
        if self._offset is not None and self._offset < 0:
            found.add(Issue.NEGATIVE_OFFSET)
        if kind is QueryType.INSERT:
            if self._insert_values and not self._insert_columns:
                found.add(Issue.INSERT_WITHOUT_COLUMNS)
            elif len(self._insert_columns) != len(self._insert_values):
                found.add(Issue.INSERT_COUNT_MISMATCH)
            if self._predicates:
                found.add(Issue.WHERE_ON_INSERT)
        if kind is QueryType.UPDATE and not self._update_columns:
            found.add(Issue.EMPTY_UPDATE)
        if kind is not QueryType.SELECT and self._joins:
            found.add(Issue.JOIN_IGNORED)
        if kind in (QueryType.UPDATE, QueryType.DELETE) and self._offset is not None:
            found.add(Issue.OFFSET_IGNORED)
        if kind is not QueryType.INSERT and any(p.op.strip().upper() not in valid_operators for p in self._predicates):
            found.add(Issue.UNKNOWN_OPERATOR)
        if any(not is_safe_identifier(n) for n in self._identifiers() if n):
            found.add(Issue.SANITIZED_IDENTIFIER)
        return [i for i in Issue if i in found]

    def build(self, strict: bool = False) -> Query:
        """Render the statement; with ``strict`` raise StatementError on any validation issue."""
        if strict:
            issues = self.validate()
            if issues:
                logger.warning('Refusing to build %s on %r: %s', self._kind.value, self._table,
                               [i.name for i in issues])
                raise StatementError(issues)
        if self._kind is QueryType.INSERT:
            sql, params = self._build_insert()
        elif self._kind is QueryType.UPDATE:
            sql, params = self._build_update()
        elif self._kind is QueryType.DELETE:
            sql, params = self._build_delete()
        else:
            sql, params = self._build_select()
        logger.debug('Built %s: %s | %d params', self._kind.value, sql, len(params))
        return Query(sql, tuple(params))

    def _tail(self, with_offset: bool) -> str:
        """ORDER BY / LIMIT / OFFSET suffix."""
        sql = ''
        if self._order:
            sql += f' order by {safe_identifier(self._order)}'
        if self._limit is not None:
            sql += f' limit {self._limit}'
        if with_offset and self._offset is not None:
            sql += f' offset {self._offset}'
        return sql

    def _build_select(self) -> Tuple[str, List[Any]]:
        cols = ', '.join(safe_identifier(c) for c in self._columns)
        sql = f'select {cols} from {safe_identifier(self._table)}'
        if self._alias:
            sql += f' as {safe_identifier(self._alias)}'
        sql += build_joins(self._joins)
        where_sql, params, _ = build_where(self._predicates, self._style, 0)
        sql += where_sql + self._tail(with_offset=True)
        return sql, params

    def _build_insert(self) -> Tuple[str, List[Any]]:
        sql = f'insert into {safe_identifier(self._table)}'
        if not self._insert_columns:
            return sql, []
        cols = ', '.join(safe_identifier(c) for c in self._insert_columns)
        phs = ', '.join(placeholder(i, self._style) for i in range(1, len(self._insert_values) + 1))
        return f'{sql} ({cols}) values ({phs})', list(self._insert_values)

    def _build_update(self) -> Tuple[str, List[Any]]:
        sets = []
        count = 0
        for column in self._update_columns:
            count += 1
            sets.append(f'{safe_identifier(column)} = {placeholder(count, self._style)}')
        sql = f'update {safe_identifier(self._table)} set {", ".join(sets)}'
        params = list(self._update_values)
        where_sql, where_params, count = build_where(self._predicates, self._style, count)
        sql += where_sql + self._tail(with_offset=False)
        return sql, params + where_params

    def _build_delete(self) -> Tuple[str, List[Any]]:
        sql = f'delete from {safe_identifier(self._table)}'
        where_sql, params, _ = build_where(self._predicates, self._style, 0)
        sql += where_sql + self._tail(with_offset=False)
        return sql, params
