"""Flask app for sqlforge statement generation. Nothing here executes SQL."""

from flask import Flask, request, jsonify, Response
from werkzeug.exceptions import HTTPException
import pandas as pd
from typing import Dict, Any, List
import logging

from .config import BUILDER_CONFIG, configure_logging
from .sql_builder import Query, StatementError, adapt_sql, df_sql
from .sql_builder.json_handler import select_builder, insert_builder, update_builder, delete_builder

app = Flask(__name__)
logger = logging.getLogger(__name__)
configure_logging()

_builders = {
    'select': select_builder,
    'insert': insert_builder,
    'update': update_builder,
    'delete': delete_builder,
}


def get_payload(required: List[str]) -> Dict[str, Any]:
    """Read the JSON body and ensure required keys are present."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValueError('Request body must be a JSON object')
    missing = [k for k in required if k not in payload]
    if missing:
        raise ValueError(f'Missing required fields: {missing}')
    return payload


def render(query: Query, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Serialize a statement, adapting it to the requested or configured dialect.

    The 'default' dialect leaves the builder's own placeholders and positional params untouched.
    """
    dialect = payload.get('dialect')
    if dialect is None:
        dialect = BUILDER_CONFIG['dialect']
        logger.debug(f'Using configured dialect {dialect}')
    if not isinstance(dialect, str):
        raise ValueError(f'dialect must be a string, got {dialect!r}')
    if dialect.strip().lower() == 'default':
        return {'sql': query.sql, 'params': list(query.params)}
    sql, params = adapt_sql(query, dialect.strip())
    return {'sql': sql, 'params': params}


@app.errorhandler(StatementError)
def handle_statement_error(e: StatementError) -> Response:
    """Report validation issues with a 400 response."""
    return jsonify({'error': str(e), 'issues': [i.name for i in e.issues]}), 400


@app.errorhandler(ValueError)
def handle_value_error(e: ValueError) -> Response:
    """Handle ValueError with 400 response."""
    return jsonify({'error': str(e)}), 400


@app.errorhandler(Exception)
def handle_general_error(e: Exception) -> Response:
    """Handle unexpected errors with 500 response."""
    if isinstance(e, HTTPException):
        return e
    logger.error(f'Server error: {e}')
    return jsonify({'error': 'Internal server error'}), 500


def _statement(kind: str) -> Response:
    payload = get_payload(['table'])
    query = _builders[kind](payload).build(strict=bool(payload.get('strict', False)))
    return jsonify(render(query, payload))


@app.route('/query/select', methods=['POST'])
def select_query():
    """Generate SELECT statement from JSON payload."""
    return _statement('select')


@app.route('/query/insert', methods=['POST'])
def insert_query():
    """Generate INSERT statement from JSON payload."""
    return _statement('insert')


@app.route('/query/update', methods=['POST'])
def update_query():
    """Generate UPDATE statement from JSON payload."""
    return _statement('update')


@app.route('/query/delete', methods=['POST'])
def delete_query():
    """Generate DELETE statement from JSON payload."""
    return _statement('delete')


@app.route('/query/validate', methods=['POST'])
def validate_query():
    """List structural issues of a payload without rendering it."""
    payload = get_payload(['table', 'kind'])
    kind = str(payload['kind']).lower()
    if kind not in _builders:
        raise ValueError(f'Invalid kind: {kind}')
    issues = _builders[kind](payload).validate()
    return jsonify({'issues': [i.name for i in issues]})


@app.route('/query/dataframe', methods=['POST'])
def dataframe_query():
    """Generate per-row statements from tabular data."""
    payload = get_payload(['data', 'table', 'columns'])
    if not isinstance(payload['data'], list) or not all(isinstance(r, dict) for r in payload['data']):
        raise ValueError('data must be a list of row objects')
    if not isinstance(payload['table'], str):
        raise ValueError('table must be a string')
    for key in ('columns', 'key_columns', 'ops'):
        value = payload.get(key)
        if (value is not None or key == 'columns') and (not isinstance(value, list) or not all(isinstance(v, str) for v in value)):
            raise ValueError(f'{key} must be a list of strings')
    df = pd.DataFrame(payload['data'])
    queries = df_sql(
        df,
        table=payload['table'],
        columns=payload['columns'],
        key_columns=payload.get('key_columns'),
        ops=payload.get('ops', ['insert']),
        param_style=payload.get('param_style')
    )
    return jsonify([[render(q, payload) for q in row_queries] for row_queries in queries])


if __name__ == '__main__':
    app.run(debug=BUILDER_CONFIG['debug'])
