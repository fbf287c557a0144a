# Overview: Flask CLI command groups for bootstrap, users and kit inventory.

# backend/medkit/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to "medkit:create_app".
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create all tables (idempotent).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Users:
# - python -m flask users create --username admin --password "..."
#   Create an operator account (prompts if options are omitted).
# - python -m flask users list
#
# Kits:
# - python -m flask kits seed-dummy
#   Insert SN001-SN004 sample kits.
# - python -m flask kits import kits.csv
#   Bulk import kits from a CSV file (same layout as POST /kits/upload).
# - python -m flask kits summary
#   Count kits by status.

import click
from flask.cli import with_appcontext

from .extensions import db
from .models import User
from .services import kit_service, import_service
from .services.auth_service import create_user
from .services.import_service import KitImportError


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables."""
    db.create_all()
    click.echo("Database tables created.")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """Drop and recreate all tables. Deletes all data."""
    if not yes:
        click.confirm("This will delete ALL data. Continue?", abort=True)
    db.drop_all()
    db.create_all()
    click.echo("Database reset complete.")


@click.group('users')
def users_group():
    """Operator account commands."""


@users_group.command('create')
@click.option('--username', prompt=True, help='Username')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
@with_appcontext
def create_user_cli(username, password):
    """Create an operator account."""
    try:
        user = create_user(username, password)
    except ValueError as e:
        raise click.ClickException(str(e))
    click.echo(f"Created user {user.username} (id={user.id})")


@users_group.command('list')
@with_appcontext
def list_users():
    users = db.session.query(User).order_by(User.id).all()
    if not users:
        click.echo("No users.")
        return
    for user in users:
        click.echo(f"{user.id}\t{user.username}")


@click.group('kits')
def kits_group():
    """Kit inventory commands."""


@kits_group.command('seed-dummy')
@with_appcontext
def seed_dummy():
    kits = kit_service.seed_dummy_kits()
    click.echo(f"Inserted {len(kits)} dummy kits.")


@kits_group.command('import')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@with_appcontext
def import_kits(path):
    """Import kits from a CSV file."""
    try:
        kits = import_service.import_csv_file(path)
    except KitImportError as e:
        raise click.ClickException(str(e))
    click.echo(f"Imported {len(kits)} kits.")


@kits_group.command('summary')
@with_appcontext
def kits_summary():
    summary = kit_service.inventory_summary()
    for status, count in sorted(summary.items()):
        click.echo(f"{status}\t{count}")


def register_commands(app):
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
    app.cli.add_command(kits_group)
