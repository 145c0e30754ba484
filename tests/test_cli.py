"""
Tests for the operator CLI commands.
"""
from intake.extensions import admin_sessions
from intake.services import credentials


def test_set_admin_password(app):
    with app.app_context():
        token = admin_sessions.create()

    result = app.test_cli_runner().invoke(args=['set-admin-password', '--password', 'from-the-cli'])
    assert result.exit_code == 0, result.output
    assert 'Admin password updated' in result.output

    with app.app_context():
        assert credentials.check_password('from-the-cli')
    assert not admin_sessions.is_valid(token)


def test_set_admin_password_too_short(app):
    result = app.test_cli_runner().invoke(args=['set-admin-password', '--password', 'abc'])
    assert result.exit_code != 0
    assert 'at least 6' in result.output


def test_admin_password_source(app):
    runner = app.test_cli_runner()
    assert 'config' in runner.invoke(args=['admin-password-source']).output

    runner.invoke(args=['set-admin-password', '--password', 'from-the-cli'])
    assert 'database' in runner.invoke(args=['admin-password-source']).output


def test_rotation_from_cli_refuses_server_sessions(app, monkeypatch):
    with app.app_context():
        token = admin_sessions.create()

    # The command runs in its own process and cannot reach this store
    monkeypatch.setattr(admin_sessions, 'clear', lambda: None)
    result = app.test_cli_runner().invoke(args=['set-admin-password', '--password', 'from-the-cli'])
    assert result.exit_code == 0, result.output
    assert admin_sessions.is_valid(token)

    client = app.test_client(use_cookies=False)
    response = client.get('/admin/submissions', headers={'Cookie': f'admin_sid={token}'})
    assert response.status_code == 401
