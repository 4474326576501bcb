"""
Command-line converter, run via ``python -m dta``.
"""
# Standard Library
import pathlib

# Dta Modules
from dta.cli import cli

if __name__ == '__main__':
    cli.main(prog_name=pathlib.Path(__file__).parent.name)
