"""Runtime configuration read from the environment."""

import logging
import os
from typing import Any, Dict, Mapping, Optional

param_styles = ('dollar_number', 'question_mark')
dialects = ('default', 'sqlite', 'mysql', 'postgres', 'postgresql', 'oracle', 'mssql')
log_levels = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Build the config dict from SQLFORGE_* variables."""
    env = os.environ if environ is None else environ
    config = {
        'param_style': env.get('SQLFORGE_PARAM_STYLE', 'dollar_number').strip().lower(),
        'dialect': env.get('SQLFORGE_DIALECT', 'default').strip().lower(),
        'log_level': env.get('SQLFORGE_LOG_LEVEL', 'WARNING').strip().upper(),
        'debug': env.get('SQLFORGE_DEBUG', '0').strip().lower() in ('1', 'true', 'yes'),
    }
    if config['param_style'] not in param_styles:
        raise ValueError(f"Invalid SQLFORGE_PARAM_STYLE: {config['param_style']}")
    if config['dialect'] not in dialects:
        raise ValueError(f"Invalid SQLFORGE_DIALECT: {config['dialect']}")
    if config['log_level'] not in log_levels:
        raise ValueError(f"Invalid SQLFORGE_LOG_LEVEL: {config['log_level']}")
    return config


def configure_logging(config: Optional[Mapping[str, Any]] = None):
    """Apply the configured log level to the package logger."""
    config = config or BUILDER_CONFIG
    level = logging.DEBUG if config['debug'] else getattr(logging, config['log_level'])
    logging.getLogger('sqlforge').setLevel(level)


BUILDER_CONFIG = load_config()
