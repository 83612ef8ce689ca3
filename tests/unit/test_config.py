"""
Unit tests for configuration and the CLI.
"""

import pytest

from webworker.__main__ import build_config, build_parser, main
from webworker.config import ServerConfig
from webworker.http.content import Markers


class TestServerConfig:

    def test_defaults(self):
        config = ServerConfig()

        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.root == "."
        assert config.read_timeout is None
        assert config.max_header_bytes is None
        assert config.markers == Markers("<cs371date>", "<cs371server>")

    def test_valid_config(self, config):
        config.validate()

    @pytest.mark.parametrize("overrides", [
        {"port": -1},
        {"port": 70000},
        {"backlog": 0},
        {"read_timeout": 0},
        {"max_header_bytes": 0},
        {"date_marker": ""},
        {"server_name": "Serveur ☃"},
        {"root": "/definitely/not/a/real/dir"},
    ])
    def test_invalid_values(self, doc_root, overrides):
        config = ServerConfig(root=str(doc_root))
        for name, value in overrides.items():
            setattr(config, name, value)

        with pytest.raises(ValueError):
            config.validate()

    def test_from_env(self, monkeypatch, doc_root):
        monkeypatch.setenv("WEBWORKER_HOST", "0.0.0.0")
        monkeypatch.setenv("WEBWORKER_PORT", "3000")
        monkeypatch.setenv("WEBWORKER_ROOT", str(doc_root))
        monkeypatch.setenv("WEBWORKER_TIMEOUT", "2.5")
        monkeypatch.setenv("WEBWORKER_SERVER_NAME", "EnvServer")
        monkeypatch.setenv("WEBWORKER_MAX_HEADER_BYTES", "8192")

        config = ServerConfig.from_env()

        assert config.host == "0.0.0.0"
        assert config.port == 3000
        assert config.root == str(doc_root)
        assert config.read_timeout == 2.5
        assert config.server_name == "EnvServer"
        assert config.max_header_bytes == 8192

    def test_from_env_without_timeout(self, monkeypatch):
        monkeypatch.delenv("WEBWORKER_TIMEOUT", raising=False)
        assert ServerConfig.from_env().read_timeout is None


class TestCli:

    def test_flags_override_env(self, monkeypatch, doc_root):
        monkeypatch.setenv("WEBWORKER_PORT", "3000")
        args = build_parser().parse_args(
            ["--port", "4000", "--root", str(doc_root), "-t", "1.5", "-l", "DEBUG",
             "--max-header-bytes", "4096"]
        )

        config = build_config(args)

        assert config.port == 4000
        assert config.root == str(doc_root)
        assert config.read_timeout == 1.5
        assert config.log_level == "DEBUG"
        assert config.max_header_bytes == 4096

    def test_env_used_when_flag_missing(self, monkeypatch):
        monkeypatch.setenv("WEBWORKER_PORT", "3000")
        config = build_config(build_parser().parse_args([]))
        assert config.port == 3000

    def test_invalid_root_exits_with_error(self, capsys):
        assert main(["--root", "/definitely/not/a/real/dir"]) == 1
        assert "Document root" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert "WebWorker" in capsys.readouterr().out
