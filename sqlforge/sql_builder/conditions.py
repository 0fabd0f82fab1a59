"""Predicate and join records, plus parsing of condition inputs for WHERE clauses."""

import re
from enum import Enum
from typing import Any, List, Tuple, Union

from .mappings import join_keywords, joiners


class JoinType(Enum):
    """Join kind; the value is the keyword rendered in the statement."""
    JOIN = join_keywords['join']
    LEFT = join_keywords['left']
    RIGHT = join_keywords['right']
    INNER = join_keywords['inner']
    FULL = join_keywords['full']


class JoinSpec:
    """A single JOIN: kind, table, optional alias and a raw ON condition."""
    __slots__ = ('kind', 'table', 'alias', 'condition')

    def __init__(self, kind: JoinType, table: str, condition: str, alias: str = ''):
        self.kind = kind
        self.table = table
        self.alias = alias
        self.condition = condition

    def __eq__(self, other):
        if not isinstance(other, JoinSpec):
            return NotImplemented
        return (self.kind, self.table, self.alias, self.condition) == \
            (other.kind, other.table, other.alias, other.condition)

    def __repr__(self):
        return f'JoinSpec({self.kind.name}, {self.table!r}, {self.condition!r}, alias={self.alias!r})'


class Predicate:
    """One WHERE condition and the joiner linking it to the previous one."""
    __slots__ = ('column', 'op', 'value', 'joiner')

    def __init__(self, column: str, op: str, value: Any, joiner: str = 'and'):
        self.column = column
        self.op = op
        self.value = value
        self.joiner = joiner

    def __eq__(self, other):
        if not isinstance(other, Predicate):
            return NotImplemented
        return (self.column, self.op, self.value, self.joiner) == \
            (other.column, other.op, other.value, other.joiner)

    def __repr__(self):
        return f'Predicate({self.column!r}, {self.op!r}, {self.value!r}, joiner={self.joiner!r})'

    @classmethod
    def from_input(cls, item: Any) -> 'Predicate':
        """Create predicate from a Predicate, dict, tuple or list, or condition string."""
        if isinstance(item, cls):
            return item
        if isinstance(item, dict):
            column = item.get('field', item.get('column'))
            if column is None or 'operator' not in item:
                raise ValueError(f'Condition needs field and operator: {item}')
            return cls._checked(column, item['operator'], item.get('value'), item.get('joiner', 'and'))
        if isinstance(item, (tuple, list)):
            if len(item) not in (3, 4):
                raise ValueError(f'Condition sequence needs 3 or 4 items, got {len(item)}')
            return cls._checked(*item)
        if isinstance(item, str):
            return cls.from_string(item)
        raise TypeError(f'Unsupported condition type: {type(item)}')

    @classmethod
    def _checked(cls, column: Any, op: Any, value: Any, joiner: Any = 'and') -> 'Predicate':
        if not isinstance(column, str) or not isinstance(op, str):
            raise ValueError(f'Condition field and operator must be strings, got {column!r} {op!r}')
        return cls(column, op, value, _joiner(joiner))

    @classmethod
    def from_string(cls, text: str) -> 'Predicate':
        """Parse '[and|or] <column> <op> <value>' (e.g. "or age >= 30")."""
        tokens = _tokenize(text)
        if not tokens:
            raise ValueError('Empty condition')
        joiner = 'and'
        if tokens[0][0] in ('AND', 'OR'):
            joiner = tokens[0][0].lower()
            tokens = tokens[1:]
        if len(tokens) != 3:
            raise ValueError(f'Cannot parse condition: {text}')
        (kind, column), (op_kind, op), (val_kind, raw) = tokens
        if kind != 'IDENT':
            raise ValueError('Condition must start with field name')
        if op_kind not in ('COMP_OP', 'LIKE', 'ILIKE', 'NOT_LIKE', 'NOT_ILIKE'):
            raise ValueError(f'Unsupported operator in condition: {text}')
        if op_kind != 'COMP_OP':
            op = ' '.join(op.upper().split())
        if val_kind == 'STRING':
            value = raw
        elif val_kind in ('NUMBER', 'IDENT'):
            value = _coerce(raw)
        else:
            raise ValueError(f'Missing value in condition: {text}')
        return cls(column, op, value, joiner)


def _joiner(value: str) -> str:
    """Normalise a joiner name."""
    joiner = str(value).strip().lower()
    if joiner not in joiners:
        raise ValueError(f'Invalid joiner: {value}')
    return joiner


def _coerce(val: str) -> Union[int, float, bool, None, str]:
    """Coerce an unquoted token to bool, None, int or float where it looks like one."""
    lowered = val.lower()
    if lowered == 'true':
        return True
    if lowered == 'false':
        return False
    if lowered == 'null':
        return None
    try:
        return int(val)
    except ValueError:
        try:
            return float(val)
        except ValueError:
            return val


_token_spec = [
    (r'\s+', None),
    (r'\bNOT\s+ILIKE\b', 'NOT_ILIKE'),
    (r'\bNOT\s+LIKE\b', 'NOT_LIKE'),
    (r'\bILIKE\b', 'ILIKE'),
    (r'\bLIKE\b', 'LIKE'),
    (r'!=|<>|<=|>=|>|<|=', 'COMP_OP'),
    (r"'(?:[^']|'')*'", 'STRING'),
    (r'-?\d+(?:\.\d+)?\b', 'NUMBER'),
    (r'\bAND\b', 'AND'),
    (r'\bOR\b', 'OR'),
    (r'[A-Za-z_][\w.]*', 'IDENT'),
]
_master_re = re.compile('|'.join(f'(?P<{name or "WHITESPACE"}>{pat})' for pat, name in _token_spec), re.IGNORECASE)


def _tokenize(text: str) -> List[Tuple[str, str]]:
    """Tokenize a condition string."""
    pos = 0
    out = []
    while pos < len(text):
        m = _master_re.match(text, pos)
        if not m:
            raise ValueError(f'Unexpected char at {pos}: {text[pos:pos + 10]}')
        pos = m.end()
        kind = m.lastgroup
        if kind == 'WHITESPACE':
            continue
        value = m.group()
        if kind == 'STRING':
            value = value[1:-1].replace("''", "'")
        out.append((kind, value))
    return out
