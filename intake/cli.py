"""Operator commands, run with `flask --app intake ...`."""

import click
from flask import Flask

from intake.errors import IntakeError
from intake.extensions import admin_sessions
from intake.services import credentials


def register_commands(app: Flask):
    """Attach the admin commands to the app's CLI."""

    @app.cli.command('set-admin-password')
    @click.password_option('--password', prompt='New admin password')
    def set_admin_password(password):
        """Save a new admin panel password and end all sessions."""
        try:
            credentials.set_password(password)
        except IntakeError as e:
            raise click.ClickException(e.message)
        admin_sessions.clear()
        click.echo('✅ Admin password updated. Existing admin sessions will be refused.')

    @app.cli.command('admin-password-source')
    def admin_password_source():
        """Show whether the admin password comes from the database or config."""
        resolved = credentials.current_password()
        click.echo(f'Admin password source: {resolved.source}')
