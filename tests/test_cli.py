"""Tests for the wordchain command line."""

import pytest

from wordchain.cli import main
from wordchain.store import DataError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in ("JWT_KEY", "DATABASE", "COOKIE_SECURE", "HOST", "PORT", "ALLOW_CORS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("wordchain.security.audit.set_security_event_sink", lambda sink: None)


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as info:
            main([])
        assert info.value.code == 0
        assert "wordchain" in capsys.readouterr().out


class TestRoutes:
    def test_prints_tree(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes"])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split() == ["PATH", "METHODS", "NODE"]
        paths = [line.split()[0] for line in lines[2:]]
        assert paths == ["/", "/account", "/account/*", "/login", "/session"]
        assert "AccountInfoRoute" in out

    def test_bad_database_url(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(DataError, match="Unsupported database URL"):
            main(["routes", "--database", "mysql://x"])


class TestRun:
    def test_missing_secret_exits_1(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as info:
            main(["run"])
        assert info.value.code == 1
        assert "JWT_KEY" in capsys.readouterr().err

    def test_env_file_is_read(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".env").write_text("JWT_KEY=from-dotenv\nPORT=8123\n")
        served = []
        monkeypatch.setattr("wordchain.server.run.serve", lambda app: served.append(app))
        monkeypatch.setattr("wordchain.logging.configure_logging", lambda *a: None)
        main(["run", "--insecure-cookies", "--cors"])
        (app,) = served
        assert app.config.secret_key == "from-dotenv"
        assert app.config.port == 8123
        assert app.config.cookie_secure is False
        assert app.config.allow_cors is True

    def test_environment_beats_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".env").write_text("JWT_KEY=from-dotenv\n")
        monkeypatch.setenv("JWT_KEY", "from-env")
        served = []
        monkeypatch.setattr("wordchain.server.run.serve", lambda app: served.append(app))
        monkeypatch.setattr("wordchain.logging.configure_logging", lambda *a: None)
        main(["run", "--port", "9001"])
        (app,) = served
        assert app.config.secret_key == "from-env"
        assert app.config.port == 9001
        assert app.config.cookie_secure is True
