"""End-to-end CLI coverage for the operator commands.

Lookups run against a stubbed boto3 client so the full path from settings
file to JSON output is exercised without network access.
"""

from __future__ import annotations

import json
from pathlib import Path

import lib_cli_exit_tools
from click.testing import CliRunner

from lib_dynamodb_config import cli
from tests.support import expected_get_item, make_item

SETTINGS_TOML = """
[profiles]
active = "dynamodb"

[server.dynamodb]
region = "us-east-1"
table = "config_table"
access-key = "AKIA-CLI"
secret-key = "cli-secret"
"""


def _runner() -> CliRunner:
    return CliRunner()


def _settings_file(tmp_path: Path, body: str = SETTINGS_TOML, name: str = "server.toml") -> Path:
    path = tmp_path / name
    path.write_text(body, encoding="utf-8")
    return path


def test_cli_lookup_key_default_delimiter() -> None:
    result = _runner().invoke(cli.cli, ["lookup-key", "myapp", "dev"])
    assert result.exit_code == 0
    assert result.output.strip() == "myapp-dev"


def test_cli_settings_redacts_secret(tmp_path: Path) -> None:
    result = _runner().invoke(cli.cli, ["settings", "--settings", str(_settings_file(tmp_path))])
    assert result.exit_code == 0
    assert "cli-secret" not in result.output
    payload = json.loads(result.output)
    assert payload["active"] is True
    assert payload["profiles"] == ["dynamodb"]
    assert payload["dynamodb"]["table"] == "config_table"
    assert payload["dynamodb"]["secret_key"] == "***"
    assert payload["composite"] == []


def test_cli_settings_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("LIB_DYNAMODB_CONFIG_SERVER__DYNAMODB__TABLE", "from_env")
    result = _runner().invoke(cli.cli, ["settings"])
    assert result.exit_code == 0
    assert json.loads(result.output)["dynamodb"]["table"] == "from_env"


def test_cli_find_prints_environment(tmp_path: Path, stubbed_dynamodb) -> None:
    stubber, requested = stubbed_dynamodb
    stubber.add_response(
        "get_item",
        {"Item": make_item("myapp-dev", {"app": {"name": "My Application"}, "feature.enabled": True})},
        expected_get_item("myapp-dev"),
    )

    result = _runner().invoke(
        cli.cli,
        ["find", "myapp", "dev", "master", "--settings", str(_settings_file(tmp_path)), "--trace-id", "req-1"],
    )

    assert result.exit_code == 0, result.output
    assert requested[0]["aws_access_key_id"] == "AKIA-CLI"
    payload = json.loads(result.output)
    assert payload == {
        "name": "myapp",
        "profiles": ["dev"],
        "label": "master",
        "propertySources": [
            {
                "name": "DynamoDB://us-east-1:config_table/myapp/dev/master",
                "source": {"app.name": "My Application", "feature.enabled": True},
            }
        ],
    }


def test_cli_find_missing_record_prints_empty_environment(tmp_path: Path, stubbed_dynamodb) -> None:
    stubber, _ = stubbed_dynamodb
    stubber.add_response("get_item", {}, expected_get_item("ghost-app-prod"))

    result = _runner().invoke(cli.cli, ["find", "ghost-app", "prod", "--settings", str(_settings_file(tmp_path))])

    assert result.exit_code == 0
    assert json.loads(result.output) == {"name": "ghost-app", "profiles": ["prod"], "label": None, "propertySources": []}


def test_cli_find_inactive_profile_skips_backend(tmp_path: Path) -> None:
    path = _settings_file(tmp_path, '[profiles]\nactive = "native"\n')
    result = _runner().invoke(cli.cli, ["find", "myapp", "dev", "--settings", str(path), "--indent", "2"])
    assert result.exit_code == 0
    assert json.loads(result.output)["propertySources"] == []


def test_cli_info_handles_missing_metadata(monkeypatch) -> None:
    def _raise_pkg_not_found(*_args, **_kwargs):
        raise cli.metadata.PackageNotFoundError()

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output


def test_cli_main_reports_misconfiguration(tmp_path: Path) -> None:
    path = _settings_file(tmp_path, '[profiles]\nactive = "dynamodb"\n[server.dynamodb]\ntable = "t"\n')
    assert cli.main(["find", "myapp", "dev", "--settings", str(path)]) != 0


def test_cli_main_reports_invalid_settings_file(tmp_path: Path) -> None:
    path = _settings_file(tmp_path, "{broken", name="server.json")
    assert cli.main(["settings", "--settings", str(path)]) != 0


def test_cli_main_restores_traceback_flag() -> None:
    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    exit_code = cli.main(["--traceback", "lookup-key", "service", "test"], restore_traceback=True)
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback
