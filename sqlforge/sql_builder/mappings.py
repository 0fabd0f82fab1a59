"""Keyword denylists, operators and clause spellings used by the statement builder."""

import re

# Structural keywords stripped from identifiers, operators and join conditions
blocked_keywords = [
    'execute', 'exec', 'drop', 'delete', 'insert', 'update', 'create', 'alter', 'truncate'
]

# Anything in here marks an identifier as unsafe and forces it through the strict sanitizer
dangerous_patterns = [
    "';", '";', '--', '/*', '*/',
    'drop', 'delete', 'insert', 'update', 'create', 'alter', 'truncate', 'exec', 'execute',
    'union', 'select', 'into', 'from', 'where', 'join'
]

# Characters allowed to survive the strict sanitizer
strict_chars = re.compile(r'[^a-zA-Z0-9_.*]')

# Longest keyword first so 'execute' is not left as 'ute' after removing 'exec'
keyword_pattern = re.compile('|'.join(sorted(blocked_keywords, key=len, reverse=True)), re.IGNORECASE)

# Placeholder tokens per style
placeholders = {
    'question_mark': '?',
    'dollar_number': '$'
}

# Join kind -> keyword as rendered in the statement
join_keywords = {
    'join': 'JOIN',
    'left': 'LEFT JOIN',
    'right': 'RIGHT JOIN',
    'inner': 'INNER JOIN',
    'full': 'FULL JOIN'
}

# Predicate joiners
joiners = ('and', 'or')

# Operators recognised by validation; anything else is still rendered
valid_operators = {
    '=', '!=', '<>', '<', '>', '<=', '>=',
    'LIKE', 'NOT LIKE', 'ILIKE', 'NOT ILIKE',
    'IS', 'IS NOT', 'IS DISTINCT FROM', 'IS NOT DISTINCT FROM'
}
