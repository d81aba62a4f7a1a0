from types import SimpleNamespace

from gitlabauth.core.authorizer import AuthResult
from gitlabauth.core.models import Principal
from scripts import check_access


class StubAuthorizer:
    result = None

    def __init__(self, config):
        self.config = config

    def check(self, login, token):
        StubAuthorizer.calls.append((login, token))
        return StubAuthorizer.result

    def close(self):
        StubAuthorizer.closed = True


def _patch(monkeypatch, result):
    StubAuthorizer.result = result
    StubAuthorizer.calls = []
    StubAuthorizer.closed = False
    monkeypatch.setattr(check_access, "GitlabAuthorizer", StubAuthorizer)
    monkeypatch.setattr(check_access, "load_settings", lambda: SimpleNamespace())
    monkeypatch.setenv("GITLAB_USER_TOKEN", "user-token")


def test_main_prints_roles(monkeypatch, capsys):
    _patch(monkeypatch, AuthResult(success=True, principal=Principal("Alice@Example.com", frozenset({"qa", "dev"}))))

    assert check_access.main(["--login", "alice@example.com"]) == 0

    out = capsys.readouterr().out
    assert "username=Alice@Example.com" in out
    assert "roles=dev, qa" in out
    assert StubAuthorizer.calls == [("alice@example.com", "user-token")]
    assert StubAuthorizer.closed is True


def test_main_reports_denial(monkeypatch, capsys):
    _patch(monkeypatch, AuthResult(success=False, reason="identity_mismatch", error_message="no match"))

    assert check_access.main(["--login", "bob@example.com"]) == 1

    err = capsys.readouterr().err
    assert "identity_mismatch" in err
    assert "user-token" not in err


def test_main_prompts_for_token(monkeypatch, capsys):
    _patch(monkeypatch, AuthResult(success=True, principal=Principal("a@x.io")))
    monkeypatch.delenv("GITLAB_USER_TOKEN")
    monkeypatch.setattr(check_access.getpass, "getpass", lambda prompt: "typed-token")

    assert check_access.main(["--login", "a@x.io"]) == 0
    assert StubAuthorizer.calls == [("a@x.io", "typed-token")]
    assert "roles=(none)" in capsys.readouterr().out
