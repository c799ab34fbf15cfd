"""Tests for CLI commands.

These tests verify that all CLI commands are properly registered and that
each command drives the client correctly.
"""

import json

import pytest

from conftest import (
    SAMPLE_IMAGES_RESPONSE,
    SAMPLE_QUERY_RESPONSE,
    SAMPLE_REGISTER_RESPONSE,
    sample_list_response,
)
from doc_client.runner.main import (
    cmd_delete,
    cmd_images,
    cmd_list,
    cmd_query,
    cmd_read,
    cmd_register,
    create_cli,
    main,
)
from doc_client.transport import RequestsTransport


class TestCLICommandRegistry:
    """Tests for CLI command registration."""

    def test_all_commands_registered(self):
        """Verify all expected commands are registered."""
        parser = create_cli()

        subparsers_action = None
        for action in parser._actions:
            if action.dest == "command":
                subparsers_action = action
                break

        assert subparsers_action is not None

        commands = set(subparsers_action.choices.keys())
        assert commands == {
            "init-config",
            "register",
            "publish",
            "query",
            "read",
            "images",
            "delete",
            "list",
        }

    def test_query_https_defaults_to_unset(self):
        parser = create_cli()

        assert parser.parse_args(["query", "d1"]).https is None
        assert parser.parse_args(["query", "d1", "--https"]).https is True
        assert parser.parse_args(["query", "d1", "--no-https"]).https is False

    def test_list_options(self):
        parser = create_cli()

        args = parser.parse_args(["list", "--status", "PUBLISHED", "--max-size", "20", "--all"])

        assert args.status == "PUBLISHED"
        assert args.max_size == 20
        assert args.all is True


class TestCLICommands:
    """Tests for command handlers against a recording transport."""

    def test_register_prints_result(self, client, transport, capsys):
        transport.queue(json_body=SAMPLE_REGISTER_RESPONSE)

        assert cmd_register(client, "Report", "pdf") == 0

        output = json.loads(capsys.readouterr().out)
        assert output["document_id"] == "doc-imiumkt3jmwx8hhu"
        assert output["location"].startswith("http://bj.bcebos.com/bkt-doc/")

    def test_query_without_https_flag(self, client, transport, capsys):
        transport.queue(json_body=SAMPLE_QUERY_RESPONSE)

        assert cmd_query(client, "abc123") == 0

        assert "https" not in transport.last.params
        assert json.loads(capsys.readouterr().out)["status"] == "PUBLISHED"

    def test_read_passes_expiration(self, client, transport, capsys):
        transport.queue(json_body={"documentId": "abc123", "token": "tok"})

        assert cmd_read(client, "abc123", expire_in_seconds=30) == 0
        assert transport.last.params == {"read": "", "expireInSeconds": "30"}

    def test_images_prints_urls(self, client, transport, capsys):
        transport.queue(json_body=SAMPLE_IMAGES_RESPONSE)

        assert cmd_images(client, "abc123") == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "https://doc.bj.baidubce.com/img/abc123/1.png",
            "https://doc.bj.baidubce.com/img/abc123/2.png",
        ]

    def test_delete(self, client, transport, capsys):
        transport.queue(status_code=200)

        assert cmd_delete(client, "abc123") == 0
        assert "Deleted abc123" in capsys.readouterr().out

    def test_list_all_follows_pages(self, client, transport, capsys):
        transport.queue(json_body=sample_list_response(["d1"], next_marker="d2", truncated=True))
        transport.queue(json_body=sample_list_response(["d2"]))

        assert cmd_list(client, follow=True) == 0

        out = capsys.readouterr().out
        assert "[d1]" in out
        assert "[d2]" in out
        assert "Found 2 document(s)" in out


class TestMain:
    """Tests for the main entry point."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ["DOC_SERVICE_ENDPOINT", "DOC_SERVICE_TOKEN",
                     "DOC_SERVICE_TIMEOUT", "DOC_SERVICE_MAX_RETRIES"]:
            monkeypatch.delenv(name, raising=False)

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1

    def test_init_config_writes_file(self, temp_config):
        assert main(["-c", str(temp_config), "init-config"]) == 0
        assert temp_config.exists()

        # Second run refuses to overwrite
        assert main(["-c", str(temp_config), "init-config"]) == 1

    def test_invalid_list_params_fail_without_network(self, temp_config, capsys):
        """Validation errors are reported before any request is made."""
        assert main(["-c", str(temp_config), "list", "--max-size", "-1"]) == 1

        assert "maxSize" in capsys.readouterr().out

    def test_bad_config_reported(self, temp_config, capsys):
        temp_config.write_text('doc_service:\n  endpoint: "not-a-url"\n')

        assert main(["-c", str(temp_config), "images", "d1"]) == 1
        assert "Failed to load config" in capsys.readouterr().out

    def test_non_numeric_config_value_reported(self, temp_config, capsys):
        temp_config.write_text("doc_service:\n  list_policy:\n    max_size_limit: lots\n")

        assert main(["-c", str(temp_config), "list"]) == 1
        assert "Failed to load config" in capsys.readouterr().out

    def test_transport_closed_after_command(self, temp_config, monkeypatch):
        """The HTTP session is released even when the command fails."""
        closed = []
        monkeypatch.setattr(RequestsTransport, "close", lambda self: closed.append(self))

        assert main(["-c", str(temp_config), "list", "--max-size", "-1"]) == 1

        assert len(closed) == 1
