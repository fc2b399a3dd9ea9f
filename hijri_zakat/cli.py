"""Flask CLI commands for date conversion and zakat calculation."""
import json

import click
from flask import current_app
from flask.cli import with_appcontext

from hijri_zakat.errors import InvalidInputError
from hijri_zakat.services.calc import request_from_dict
from hijri_zakat.services.hijri import (
    format_hijri,
    format_iso_date,
    gregorian_to_hijri,
    hawl_end_date,
    hijri_to_gregorian,
    parse_iso_date,
)


def _parse_date_arg(value: str):
    try:
        return parse_iso_date(value)
    except InvalidInputError as e:
        raise click.BadParameter(str(e))


@click.command('to-hijri')
@click.argument('date_str', metavar='DATE')
@click.option('--locale', default=None, help='Month name locale (en, ur, ar, hi).')
@with_appcontext
def to_hijri_command(date_str, locale):
    """Convert a Gregorian YYYY-MM-DD date to Hijri."""
    gregorian = _parse_date_arg(date_str)
    hijri = gregorian_to_hijri(*gregorian)
    click.echo(format_hijri(hijri, locale or current_app.config['DEFAULT_LOCALE']))


@click.command('to-gregorian')
@click.argument('day', type=click.IntRange(1, 30))
@click.argument('month', type=click.IntRange(0, 11))
@click.argument('year', type=int)
def to_gregorian_command(day, month, year):
    """Convert a Hijri date to Gregorian.

    MONTH is 0-based (0 = Muharram).
    """
    click.echo(format_iso_date(hijri_to_gregorian(day, month, year)))


@click.command('hawl-end')
@click.argument('date_str', metavar='DATE')
def hawl_end_command(date_str):
    """Print the date one lunar year after DATE."""
    click.echo(format_iso_date(hawl_end_date(_parse_date_arg(date_str))))


@click.command('calculate')
@click.argument('json_path', type=click.Path(exists=True))
@with_appcontext
def calculate_command(json_path):
    """Calculate zakat from a JSON file.

    The file uses the same format as POST /api/v1/calculate.
    """
    with open(json_path, 'r', encoding='utf-8') as f:
        try:
            body = json.load(f)
        except json.JSONDecodeError as e:
            raise click.ClickException(f'{json_path} is not valid JSON: {e}')

    try:
        result = request_from_dict(body, current_app.config).calculate()
    except InvalidInputError as e:
        raise click.ClickException(str(e))
    click.echo(json.dumps(result.to_dict(), indent=2))


def register_cli(app):
    """Register CLI commands with the Flask app."""
    app.cli.add_command(to_hijri_command)
    app.cli.add_command(to_gregorian_command)
    app.cli.add_command(hawl_end_command)
    app.cli.add_command(calculate_command)
