"""DataFrame-based SQL statement generation."""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
import logging

import numpy as np
import pandas as pd

from .placeholders import ParamStyle
from .query_builder import Query, SQLBuilder

logger = logging.getLogger(__name__)

_op_order = ('select', 'update', 'insert', 'delete')


def to_param(value: Any) -> Any:
    """Convert a DataFrame cell to a plain Python value suitable for binding."""
    if value is None or value is pd.NA or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, pd.Timedelta):
        return value.to_pytimedelta()
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and np.isnan(value):
        return None
    return value


def df_sql(df: pd.DataFrame, table: str, columns: Sequence[str], *, key_columns: Optional[Sequence[str]] = None,
           ops: Sequence[str] = ('insert',),
           param_style: Union[ParamStyle, str, None] = None) -> List[Tuple[Query, ...]]:
    """
    Generate statements for every row of a DataFrame.

    Args:
        df: Source rows
        table: Target table
        columns: Columns to project, insert or update
        key_columns: Columns matched with '=' in WHERE for select/update/delete
        ops: Any of 'select', 'update', 'insert', 'delete'
        param_style: Placeholder style for every statement

    Returns:
        One tuple of statements per row, ordered select, update, insert, delete
    """
    if not isinstance(df, pd.DataFrame):
        raise TypeError('Input must be a pandas DataFrame')
    unknown_ops = [o for o in ops if o not in _op_order]
    if unknown_ops:
        raise ValueError(f'Unsupported ops: {unknown_ops}')
    if df.empty:
        return []
    key_columns = list(key_columns or [])
    missing = [c for c in list(columns) + key_columns if c not in df.columns]
    if missing:
        raise ValueError(f'Columns not in DataFrame: {missing}')
    if not key_columns and any(o in ops for o in ('update', 'delete')):
        logger.warning('No key_columns for update/delete on %s; statements will affect every row', table)
    set_columns = [c for c in columns if c not in key_columns]
    out = []
    for record in df.to_dict('records'):
        row: Dict[str, Any] = {k: to_param(v) for k, v in record.items()}
        keys = [(c, '=', row[c]) for c in key_columns]
        row_ops = []
        for op in _op_order:
            if op not in ops:
                continue
            builder = SQLBuilder(param_style).table(table)
            if op == 'select':
                builder.select(*columns).filter_by(keys)
            elif op == 'update':
                builder.update({c: row[c] for c in set_columns}).filter_by(keys)
            elif op == 'insert':
                builder.insert({c: row[c] for c in columns})
            else:
                builder.delete().filter_by(keys)
            row_ops.append(builder.build())
        out.append(tuple(row_ops))
    return out
