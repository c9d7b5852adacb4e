# Flask CLI commands: `flask init-db`, `flask create-admin`
import logging

import click
from flask.cli import with_appcontext

from osteovet import db
from osteovet.errors import ValidationError
from osteovet.models.user_model import Role, STAFF_ROLES, User
from osteovet.services.auth_service import hash_password, validate_email, validate_name, MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)


@click.command('init-db')
@with_appcontext
def init_db():
    db.create_all()
    click.echo('Database initialized.')


@click.command('create-admin')
@click.option('--email', required=True)
@click.option('--password', required=True)
@click.option('--first-name', default='Admin')
@click.option('--last-name', default='OsteoVet')
@click.option('--role', type=click.Choice([r.value for r in STAFF_ROLES]), default=Role.ADMIN.value)
@with_appcontext
def create_admin(email, password, first_name, last_name, role):
    """Seed a validated staff account."""
    try:
        email = validate_email(email)
        first_name = validate_name(first_name, 'First name')
        last_name = validate_name(last_name, 'Last name')
    except ValidationError as e:
        raise click.BadParameter(e.message)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise click.BadParameter(f'Password must be at least {MIN_PASSWORD_LENGTH} characters long')
    if User.query.filter_by(email=email).first():
        raise click.ClickException(f'An account with email {email} already exists')

    user = User(
        email=email,
        password=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=Role(role),
        validated=True
    )
    db.session.add(user)
    db.session.commit()
    logger.info(f"Staff account created from CLI: {email} ({role})")
    click.echo(f'{role} account created: {email}')


def register_commands(app):
    app.cli.add_command(init_db)
    app.cli.add_command(create_admin)
