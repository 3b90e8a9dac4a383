"""
Tests for the postman-mcp CLI.

The inspection commands run offline against an exported collection file.
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import yaml
from click.testing import CliRunner

from postman_mcp import __version__
from postman_mcp.cli.main import cli
from postman_mcp.core.config import get_settings


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def collection_path(tmp_path, sample_collection):
    path = tmp_path / "demo.postman_collection.json"
    path.write_text(json.dumps(sample_collection), encoding="utf-8")
    return path


class TestCliGroup:
    """Tests for the command group itself."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("serve", "serve-http", "tools", "search", "structure", "show", "generate"):
            assert command in result.output

    def test_tools(self, runner):
        result = runner.invoke(cli, ["tools"])
        assert result.exit_code == 0
        tools = json.loads(result.output)
        assert [t["name"] for t in tools][-1] == "create_action"


class TestSearchCommand:
    """Test the search command."""

    def test_search(self, runner, collection_path):
        result = runner.invoke(cli, ["search", str(collection_path), "log"])

        assert result.exit_code == 0
        assert json.loads(result.output) == [
            {"type": "request", "id": "r-login", "name": "Login", "method": "POST", "path": "Auth / Login"},
            {"type": "request", "name": "Legacy Logout", "method": "GET", "path": "Legacy Logout"},
        ]

    def test_search_folders_as_yaml(self, runner, collection_path):
        result = runner.invoke(cli, ["search", str(collection_path), "", "--type", "folder", "-f", "yaml"])

        assert result.exit_code == 0
        assert [r["name"] for r in yaml.safe_load(result.output)] == ["Auth", "Tokens"]

    def test_search_envelope_file(self, runner, tmp_path, sample_collection):
        path = tmp_path / "envelope.json"
        path.write_text(json.dumps({"collection": sample_collection}), encoding="utf-8")

        result = runner.invoke(cli, ["search", str(path), "ping"])

        assert result.exit_code == 0
        assert json.loads(result.output)[0]["id"] == "r-ping"

    def test_invalid_type(self, runner, collection_path):
        result = runner.invoke(cli, ["search", str(collection_path), "x", "--type", "everything"])
        assert result.exit_code == 2


class TestStructureCommand:
    """Test the structure command."""

    def test_structure(self, runner, collection_path):
        result = runner.invoke(cli, ["structure", str(collection_path)])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["collection"] == {"id": "c0ffee00-0000-4000-8000-000000000001", "name": "Demo API"}
        assert [f["name"] for f in data["structure"]["folders"]] == ["Auth"]

    def test_invalid_json(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{broken", encoding="utf-8")

        result = runner.invoke(cli, ["structure", str(path)])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_non_utf8_file(self, runner, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes('{"info": {"name": "Café"}, "item": []}'.encode("latin-1"))

        result = runner.invoke(cli, ["structure", str(path)])

        assert result.exit_code == 1
        assert "is not UTF-8 text" in result.output

    def test_malformed_collection(self, runner, tmp_path):
        path = tmp_path / "noitems.json"
        path.write_text(json.dumps({"info": {"name": "x"}}), encoding="utf-8")

        result = runner.invoke(cli, ["structure", str(path)])

        assert result.exit_code == 1
        assert "Collection document has no 'item' list" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["structure", str(tmp_path / "absent.json")])
        assert result.exit_code == 2


class TestShowCommand:
    """Test the show command."""

    def test_show(self, runner, collection_path):
        result = runner.invoke(cli, ["show", str(collection_path), "r-login"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["method"] == "POST"
        assert data["url"] == "https://api.example.com/auth/login"
        assert data["responses"][0]["code"] == 200

    def test_show_folder_id(self, runner, collection_path):
        result = runner.invoke(cli, ["show", str(collection_path), "f-auth"])

        assert result.exit_code == 1
        assert "Request not found: f-auth" in result.output


class TestGenerateCommand:
    """Test the generate command."""

    def test_generate_typescript(self, runner, collection_path):
        result = runner.invoke(cli, [
            "generate", str(collection_path), "r-refresh", "-l", "typescript", "--framework", "langchain"
        ])

        assert result.exit_code == 0
        assert result.output.startswith("import { tool } from '@langchain/core/tools';")
        assert "interface RefreshTokenParams {" in result.output
        assert "requestBody.append('refresh_token', params.refresh_token);" in result.output

    def test_generate_requires_language(self, runner, collection_path):
        result = runner.invoke(cli, ["generate", str(collection_path), "r-login"])
        assert result.exit_code == 2

    def test_generate_unknown_request(self, runner, collection_path):
        result = runner.invoke(cli, ["generate", str(collection_path), "nope", "-l", "javascript"])
        assert result.exit_code == 1
        assert "Request not found: nope" in result.output


class TestServeCommands:
    """Test the transport commands without starting a server."""

    @pytest.fixture(autouse=True)
    def isolated_settings(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def invoke_serve(self, runner):
        server = MagicMock()
        server.return_value.run = AsyncMock()
        with patch("postman_mcp.mcp_stdio_server.MCPStdioServer", server), \
                patch("postman_mcp.cli.commands.serve_cmd.setup_logging"):
            result = runner.invoke(cli, ["serve"])
        return result, server

    def test_serve_runs_stdio_server(self, runner, monkeypatch):
        monkeypatch.setenv("POSTMAN_API_KEY", "PMAK-cli")

        result, server = self.invoke_serve(runner)

        assert result.exit_code == 0
        server.return_value.run.assert_awaited_once()
        assert "POSTMAN_API_KEY is not set" not in result.output

    def test_serve_warns_without_api_key(self, runner, monkeypatch):
        monkeypatch.delenv("POSTMAN_API_KEY", raising=False)
        monkeypatch.delenv("POSTMAN_MCP_API_KEY", raising=False)

        result, _ = self.invoke_serve(runner)

        assert result.exit_code == 0
        assert "POSTMAN_API_KEY is not set" in result.output

    def test_serve_http_passes_bind_options(self, runner):
        with patch("postman_mcp.main.run") as run:
            result = runner.invoke(cli, ["serve-http", "--host", "0.0.0.0", "--port", "9001"])

        assert result.exit_code == 0
        run.assert_called_once_with(host="0.0.0.0", port=9001)
