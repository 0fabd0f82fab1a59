"""Driver-specific placeholder adaptation of built statements."""

import re
from typing import Any, Callable, Dict, List, Tuple, Union

from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause

from .query_builder import Query

_rx_ph = re.compile(r'\$(\d+)\b|\?')


def _indexes(query: Query) -> List[int]:
    """1-based parameter index of every placeholder, in textual order."""
    out = []
    qmarks = 0
    for m in _rx_ph.finditer(query.sql):
        if m.group(1):
            out.append(int(m.group(1)))
        else:
            qmarks += 1
            out.append(qmarks)
    bad = [i for i in out if i < 1 or i > len(query.params)]
    if bad:
        raise ValueError(f'Placeholders without parameters: {bad}')
    return out


def _rename(query: Query, fmt: Callable[[str], str]) -> Tuple[str, Dict[str, Any]]:
    """Replace placeholders with named ones built by ``fmt``."""
    indexes = _indexes(query)
    names = iter(f'p{i}' for i in indexes)
    sql = _rx_ph.sub(lambda m: fmt(next(names)), query.sql)
    return sql, {f'p{i}': query.params[i - 1] for i in indexes}


def adapt_sql(query: Query, dialect: str = 'default') -> Tuple[str, Union[Dict[str, Any], List[Any]]]:
    """Adapt a built statement and its parameters for a specific driver."""
    d = dialect.lower()
    if d in ('mysql', 'sqlite'):
        sql = _rx_ph.sub('?', query.sql)
        return sql, [query.params[i - 1] for i in _indexes(query)]
    if d in ('postgres', 'postgresql'):
        return _rename(query, lambda name: f'%({name})s')
    if d in ('oracle', 'default'):
        return _rename(query, lambda name: f':{name}')
    if d == 'mssql':
        return _rename(query, lambda name: f'@{name}')
    raise ValueError(f'Unknown dialect: {d}')


def to_text(query: Query) -> TextClause:
    """Wrap a built statement as a SQLAlchemy TextClause with bound :p<n> parameters."""
    sql, params = adapt_sql(query, 'default')
    clause = text(sql)
    return clause.bindparams(**params) if params else clause
