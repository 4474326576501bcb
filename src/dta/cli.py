"""
Convert Stata version 5 and 6 ``.dta`` files to CSV.
"""

# Standard Library
import json
import logging
import logging.config
import sys

# Community Packages
import click
import yaml

# Dta Modules
import dta
import dta.v56

__all__ = [
    'cli',
]

Loader = getattr(yaml, 'CSafeLoader', yaml.SafeLoader)

try:
    with open('logging.yml') as file:
        LOG_CONFIG = yaml.load(file, Loader=Loader)
except FileNotFoundError:
    LOG_CONFIG = {
        'version': 1,
        'disable_existing_loggers': False,
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'stream': 'ext://sys.stderr',
            },
        },
        'root': {
            'handlers': ['console'],
            'level': 'WARNING',
        },
    }
logging.config.dictConfig(LOG_CONFIG)

LOG = logging.getLogger(__name__)
log_levels = [name for x, name in sorted(logging._levelToName.items()) if x]


@click.command(
    context_settings={'help_option_names': ['-h', '--help']},
)
@click.argument('input', type=click.File('rb'))
@click.argument(
    'output',
    type=click.File('wt'),
    default=sys.stdout,
)
@click.option(
    '--encoding',
    metavar='CODEC',
    default=dta.v56.TEXT_ENCODING,
    show_default=True,
    help='Text encoding of names, labels, and string data.',
)
@click.option(
    '--loglevel',
    metavar='LEVEL',
    type=click.Choice(log_levels, case_sensitive=False),
    help=f'Set logging level.  {{{", ".join(log_levels[:-1])}}}',
)
@click.version_option(version=str(dta.__version__))
def cli(input, output, encoding, loglevel):
    """
    Convert Stata version 5 or 6 data files (.dta) to comma-separated values (CSV).
    """
    if loglevel:
        LOG_CONFIG.setdefault('root', {})['level'] = loglevel.upper()
        for config in LOG_CONFIG.get('loggers', {}).values():
            config['level'] = loglevel.upper()
        logging.config.dictConfig(LOG_CONFIG)

    LOG.debug('Dta version %s', dta.__version__)
    LOG.debug('CLI arg --loglevel = %r', loglevel)
    LOG.debug('Using logging config %s', json.dumps(LOG_CONFIG, indent=2))

    try:
        ds = dta.v56.load(input, encoding=encoding)
    except dta.DtaError as e:
        raise click.ClickException(f'{type(e).__name__}: {e}')
    LOG.info(f'Read {len(ds.columns)} variables, {len(ds)} observations')
    ds.to_csv(output, index=False)
