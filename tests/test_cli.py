"""Tests for the envcascade command line interface."""

import json
from pathlib import Path

import pytest

from envcascade import cli


@pytest.fixture(autouse=True)
def clean_launcher_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ENVCASCADE_ROOT", "ENVCASCADE_OVERRIDES_ROOT", "ENVCASCADE_DECODE_VALUES"):
        monkeypatch.delenv(name, raising=False)


class TestShow:
    """Tests for `envcascade show`."""

    def test_prints_provenance(self, install_root: Path, capsys):
        code = cli.main(["show", "api", "--root", str(install_root)])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["service"] == "api"
        assert output["sources"]["base"]["variables"] == [
            "DATABASE_URL",
            "REDIS_URL",
            "LOG_LEVEL",
            "NODE_ENV",
        ]
        assert output["sources"]["service"]["variables"] == ["PORT", "DATABASE_URL", "API_KEY"]
        assert output["environment"]["DATABASE_URL"] == "postgres://api"
        assert "override" not in output["sources"]

    def test_overrides_root(self, install_root: Path, tmp_path: Path, capsys):
        overrides = tmp_path / "parent"
        override_file = overrides / ".dual" / ".local" / "service" / "worker" / ".env"
        override_file.parent.mkdir(parents=True)
        override_file.write_text("REDIS_URL=redis://override\n", encoding="utf-8")

        code = cli.main(
            ["show", "worker", "--root", str(install_root), "--overrides-root", str(overrides)]
        )

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["sources"]["override"]["variables"] == ["REDIS_URL"]
        assert output["environment"]["REDIS_URL"] == "redis://override"

    def test_overrides_root_from_environment(
        self, install_root: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys
    ):
        overrides = tmp_path / "parent"
        override_file = overrides / ".dual" / ".local" / "service" / "api" / ".env"
        override_file.parent.mkdir(parents=True)
        override_file.write_text("API_KEY=local-key\n", encoding="utf-8")
        monkeypatch.setenv("ENVCASCADE_OVERRIDES_ROOT", str(overrides))

        code = cli.main(["show", "api", "--root", str(install_root)])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["sources"]["override"]["variables"] == ["API_KEY"]
        assert output["environment"]["API_KEY"] == "local-key"

    def test_values_decoded_by_default(self, install_root: Path, capsys):
        (install_root / "apps" / "api" / ".env").write_text(
            'DATABASE_URL="postgres://quoted"\n', encoding="utf-8"
        )

        cli.main(["show", "api", "--root", str(install_root)])

        output = json.loads(capsys.readouterr().out)
        assert output["environment"]["DATABASE_URL"] == "postgres://quoted"

    def test_raw_flag(self, install_root: Path, capsys):
        (install_root / "apps" / "api" / ".env").write_text(
            'DATABASE_URL="postgres://quoted"\n', encoding="utf-8"
        )

        cli.main(["show", "api", "--root", str(install_root), "--raw"])

        output = json.loads(capsys.readouterr().out)
        assert output["environment"]["DATABASE_URL"] == '"postgres://quoted"'

    def test_unreadable_source_reports_error(self, install_root: Path, capsys):
        service_file = install_root / "apps" / "api" / ".env"
        service_file.unlink()
        service_file.mkdir()

        code = cli.main(["show", "api", "--root", str(install_root)])

        assert code == 1
        error = json.loads(capsys.readouterr().err)
        assert error["error"]["code"] == "SOURCE_UNREADABLE"

    def test_unknown_service_rejected(self):
        with pytest.raises(SystemExit):
            cli.main(["show", "scheduler"])


class TestServe:
    """Tests for `envcascade serve`."""

    def test_passes_options(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        calls = []

        def fake_run_service(service, host=None, port=None, root=None, overrides_root=None):
            calls.append((service, host, port, root, overrides_root))
            return 0

        monkeypatch.setattr(cli, "run_service", fake_run_service)

        code = cli.main(
            [
                "serve", "worker",
                "--host", "127.0.0.1",
                "--port", "8123",
                "--root", str(tmp_path),
                "--overrides-root", str(tmp_path / "parent"),
            ]
        )

        assert code == 0
        assert calls == [("worker", "127.0.0.1", 8123, tmp_path, tmp_path / "parent")]

    def test_overrides_root_defaults_to_none(self, monkeypatch: pytest.MonkeyPatch):
        calls = []
        monkeypatch.setattr(cli, "run_service", lambda service, **kwargs: calls.append(kwargs) or 0)

        cli.main(["serve", "api"])

        assert calls[0]["overrides_root"] is None

    def test_requires_command(self):
        with pytest.raises(SystemExit):
            cli.main([])
