"""JSON payload handling for SQL statements."""

from typing import Any, Dict, List, Union
import logging

from .conditions import JoinType, Predicate
from .query_builder import Query, SQLBuilder

logger = logging.getLogger(__name__)

_join_types = {
    'join': JoinType.JOIN, 'left': JoinType.LEFT, 'right': JoinType.RIGHT,
    'inner': JoinType.INNER, 'full': JoinType.FULL
}


def _require(payload: Dict[str, Any], required: List[str]):
    """Raise ValueError naming any missing payload keys."""
    if not isinstance(payload, dict):
        raise ValueError(f'Payload must be an object, got {type(payload).__name__}')
    missing = [k for k in required if k not in payload]
    if missing:
        raise ValueError(f'Missing required fields: {missing}')


def _text(payload: Dict[str, Any], key: str, default: str = '') -> str:
    """Read an optional string key, rejecting any other JSON type."""
    value = payload.get(key, default)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f'{key} must be a string, got {type(value).__name__}')
    return value


def _mapping(payload: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = payload[key]
    if not isinstance(value, dict):
        raise ValueError(f'{key} must be an object mapping columns to values')
    if not all(isinstance(k, str) for k in value):
        raise ValueError(f'{key} keys must be column names')
    return value


def _count(payload: Dict[str, Any], key: str) -> int:
    try:
        return int(payload[key])
    except (TypeError, ValueError):
        raise ValueError(f'{key} must be an integer, got {payload[key]!r}') from None


def _builder(payload: Dict[str, Any]) -> SQLBuilder:
    """Create a builder with table, style and conditions taken from the payload."""
    builder = SQLBuilder(payload.get('param_style'))
    builder.table(_text(payload, 'table'))
    condition = payload.get('condition')
    if condition:
        items = condition if isinstance(condition, list) else [condition]
        if not all(isinstance(c, (str, dict, list, tuple, Predicate)) for c in items):
            raise ValueError('condition entries must be strings, objects or [field, operator, value] lists')
        builder.filter_by(items)
    return builder


def _apply_tail(builder: SQLBuilder, payload: Dict[str, Any]):
    """Apply orderby / limit / start."""
    if payload.get('orderby'):
        builder.order_by(_text(payload, 'orderby'))
    if payload.get('limit') is not None:
        builder.limit(_count(payload, 'limit'))
    if payload.get('start') is not None:
        builder.offset(_count(payload, 'start'))


def select_builder(payload: Dict[str, Any]) -> SQLBuilder:
    """Builder for a SELECT payload."""
    _require(payload, ['table'])
    builder = _builder(payload)
    fields = payload.get('fields', '*')
    if isinstance(fields, str):
        fields = [fields]
    if not isinstance(fields, (list, tuple)) or not all(isinstance(f, str) for f in fields):
        raise ValueError('fields must be a string or a list of strings')
    builder.select(*fields)
    if payload.get('alias'):
        builder.alias(_text(payload, 'alias'))
    joins = payload.get('joins') or []
    if not isinstance(joins, list):
        raise ValueError('joins must be a list')
    for j in joins:
        _require(j, ['table', 'on'])
        kind = _text(j, 'type', 'join').lower()
        if kind not in _join_types:
            raise ValueError(f'Invalid join type: {kind}')
        builder.add_join(_join_types[kind], _text(j, 'table'), _text(j, 'on'), _text(j, 'alias'))
    _apply_tail(builder, payload)
    return builder


def insert_builder(payload: Dict[str, Any]) -> SQLBuilder:
    """Builder for an INSERT payload."""
    _require(payload, ['table', 'insertValues'])
    builder = _builder(payload)
    return builder.insert(_mapping(payload, 'insertValues'))


def update_builder(payload: Dict[str, Any]) -> SQLBuilder:
    """Builder for an UPDATE payload."""
    _require(payload, ['table', 'updateValues'])
    builder = _builder(payload).update(_mapping(payload, 'updateValues'))
    if 'start' in payload:
        logger.warning('Ignoring start on update of %s', payload['table'])
        payload = {k: v for k, v in payload.items() if k != 'start'}
    _apply_tail(builder, payload)
    return builder


def delete_builder(payload: Dict[str, Any]) -> SQLBuilder:
    """Builder for a DELETE payload."""
    _require(payload, ['table'])
    builder = _builder(payload).delete()
    if 'start' in payload:
        logger.warning('Ignoring start on delete from %s', payload['table'])
        payload = {k: v for k, v in payload.items() if k != 'start'}
    _apply_tail(builder, payload)
    return builder


def json_select(payload: Dict[str, Any], strict: bool = False) -> Query:
    """Generate SELECT statement from JSON payload."""
    return select_builder(payload).build(strict)


def json_insert(payload: Union[Dict[str, Any], List[Dict[str, Any]]], strict: bool = False) -> Union[Query, List[Query]]:
    """Generate INSERT statement(s) from one payload or a list of payloads."""
    if isinstance(payload, list):
        if not payload:
            raise ValueError('No rows provided for insert')
        return [insert_builder(p).build(strict) for p in payload]
    return insert_builder(payload).build(strict)


def json_update(payload: Dict[str, Any], strict: bool = False) -> Query:
    """Generate UPDATE statement from JSON payload."""
    return update_builder(payload).build(strict)


def json_delete(payload: Dict[str, Any], strict: bool = False) -> Query:
    """Generate DELETE statement from JSON payload."""
    return delete_builder(payload).build(strict)
