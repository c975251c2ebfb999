"""CLI tests."""
import pytest

from bookshelf import cli


def test_read_password_uses_flag():
    assert cli.read_password("s3cret") == "s3cret"


def test_read_password_prompts(monkeypatch):
    answers = iter(["s3cret", "s3cret"])
    monkeypatch.setattr(cli.getpass, "getpass", lambda prompt: next(answers))
    assert cli.read_password(None) == "s3cret"


def test_read_password_mismatch(monkeypatch):
    answers = iter(["s3cret", "typo"])
    monkeypatch.setattr(cli.getpass, "getpass", lambda prompt: next(answers))
    with pytest.raises(ValueError, match="do not match"):
        cli.read_password(None)


def test_create_user_command(monkeypatch, capsys):
    calls = []

    async def fake_create_user(username, password):
        calls.append((username, password))

    monkeypatch.setattr(cli, "create_user", fake_create_user)
    cli.main(["create-user", "alice", "--password", "s3cret"])

    assert calls == [("alice", "s3cret")]
    assert "User 'alice' created" in capsys.readouterr().out


def test_create_user_existing(monkeypatch, capsys):
    async def fake_create_user(username, password):
        raise ValueError(f"User '{username}' already exists")

    monkeypatch.setattr(cli, "create_user", fake_create_user)
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["create-user", "alice", "--password", "s3cret"])

    assert exc_info.value.code == 1
    assert "already exists" in capsys.readouterr().err


def test_requires_command():
    with pytest.raises(SystemExit):
        cli.main([])


@pytest.mark.parametrize("password", ["", "   "])
def test_read_password_rejects_blank_flag(password):
    with pytest.raises(ValueError, match="must not be blank"):
        cli.read_password(password)


def test_create_user_blank_password(monkeypatch, capsys):
    async def fake_create_user(username, password):
        raise AssertionError("account must not be created")

    monkeypatch.setattr(cli, "create_user", fake_create_user)
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["create-user", "bob", "--password", "   "])

    assert exc_info.value.code == 1
    assert "must not be blank" in capsys.readouterr().err
