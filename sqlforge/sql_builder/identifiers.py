"""
Identifier safety for table, column, alias and ordering text.

Two sanitizers are applied depending on where the text ends up:

* ``strict_identifier`` for names: keeps ``[A-Za-z0-9_.*]`` and removes
  structural keywords.
* ``strip_keywords`` for operators and join conditions: removes structural
  keywords only, since those positions need spaces, parentheses and symbols.

``safe_identifier`` routes a name: text that looks harmless is returned
untouched, anything else is strictly sanitized and double-quoted.
This is a denylist filter, not a grammar check.
"""

import logging

from .mappings import dangerous_patterns, keyword_pattern, strict_chars

logger = logging.getLogger(__name__)


def strip_keywords(text: str) -> str:
    """
    Remove structural keywords, case-insensitively, everywhere in ``text``.

    Removal is repeated until nothing matches, so ``dRdropOP`` cannot
    collapse into a fresh ``drop``.

    Examples:
        >>> strip_keywords('a.id = b.id; DROP TABLE logs')
        'a.id = b.id;  TABLE logs'
        >>> strip_keywords('>=')
        '>='
    """
    cleaned = keyword_pattern.sub('', text)
    while cleaned != text:
        text = cleaned
        cleaned = keyword_pattern.sub('', text)
    return cleaned


def strict_identifier(text: str) -> str:
    """
    Reduce ``text`` to identifier characters with structural keywords removed.

    Examples:
        >>> strict_identifier('users; DROP TABLE accounts; --')
        'usersTABLEaccounts'
        >>> strict_identifier('public.users')
        'public.users'
    """
    return strip_keywords(strict_chars.sub('', text))


def is_safe_identifier(text: str) -> bool:
    """Return True if ``text`` is non-empty, quote-free and free of dangerous patterns."""
    if not text:
        return False
    if '"' in text or "'" in text:
        return False
    lower = text.lower()
    return not any(p in lower for p in dangerous_patterns)


def quote_identifier(name: str) -> str:
    """
    Double-quote a name, doubling any internal double quotes.

    Examples:
        >>> quote_identifier('order')
        '"order"'
        >>> quote_identifier('col"name')
        '"col""name"'
    """
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def safe_identifier(text: str) -> str:
    """
    Return ``text`` unchanged when it looks safe, else its sanitized, quoted form.

    Examples:
        >>> safe_identifier('users.name')
        'users.name'
        >>> safe_identifier('users; DROP TABLE accounts; --')
        '"usersTABLEaccounts"'
    """
    if is_safe_identifier(text):
        return text
    cleaned = quote_identifier(strict_identifier(text))
    logger.warning('Sanitized identifier %r -> %s', text, cleaned)
    return cleaned
