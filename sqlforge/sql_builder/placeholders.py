"""Bound-parameter placeholder styles."""

from enum import Enum
from typing import Union

from .mappings import placeholders


class ParamStyle(Enum):
    """Placeholder convention used for every parameter of a statement."""
    QUESTION_MARK = placeholders['question_mark']
    DOLLAR_NUMBER = placeholders['dollar_number']

    @classmethod
    def coerce(cls, value: Union['ParamStyle', str]) -> 'ParamStyle':
        """Accept a member, its token ('?', '$') or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for style in cls:
                if value == style.value or value.strip().upper() == style.name:
                    return style
        raise ValueError(f'Unknown parameter style: {value!r}')


def placeholder(index: int, style: ParamStyle = ParamStyle.DOLLAR_NUMBER) -> str:
    """Render the placeholder for the 1-based parameter ``index``."""
    if style is ParamStyle.QUESTION_MARK:
        return style.value
    return f'{ParamStyle.DOLLAR_NUMBER.value}{index}'
