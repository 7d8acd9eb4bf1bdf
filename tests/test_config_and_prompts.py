from pathlib import Path

import pytest

from must_gather_mcp.config import ServerConfig
from must_gather_mcp.prompts import PromptManager


def test_config_defaults(monkeypatch, tmp_path: Path) -> None:
    env_keys = (
        "MUST_GATHER_PATH",
        "MUST_GATHER_LIB_PATH",
        "MCP_TRANSPORT",
        "MCP_SSE_PORT",
        "MCP_STREAMABLE_HTTP_PORT",
        "LOG_LEVEL",
    )
    for key in env_keys:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)

    config = ServerConfig()

    assert config.must_gather_path == str(tmp_path)
    assert config.transport == "stdio"
    assert config.sse_port == 8000
    assert config.streamable_http_port == 8080
    assert config.log_level == "INFO"
    assert config.analyzer_library_path == str(tmp_path / "must-gather-lib.ts")


def test_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("MUST_GATHER_PATH", "/data/mg")
    monkeypatch.setenv("MCP_TRANSPORT", "HTTP")
    monkeypatch.setenv("MCP_SSE_PORT", "9000")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = ServerConfig()

    assert config.must_gather_path == "/data/mg"
    assert config.transport == "http"
    assert config.sse_port == 9000
    assert config.log_level == "DEBUG"


def test_config_rejects_unknown_transport(monkeypatch) -> None:
    monkeypatch.setenv("MCP_TRANSPORT", "carrier-pigeon")

    with pytest.raises(ValueError, match="MCP_TRANSPORT must be one of: http, stdio"):
        ServerConfig()


def test_prompt_manager_resolves_dotted_keys() -> None:
    prompt = PromptManager()._load_prompt("tools.get_type_definition")

    assert prompt.startswith("Get type definitions")


def test_prompt_manager_missing_key_raises(tmp_path: Path) -> None:
    prompts_path = tmp_path / "prompts.yaml"
    prompts_path.write_text("tools:\n  other: text\n", encoding="utf-8")

    with pytest.raises(KeyError, match="tools.search_analysis"):
        PromptManager(prompts_path)._load_prompt("tools.search_analysis")


def test_config_rejects_unknown_log_level(monkeypatch) -> None:
    monkeypatch.delenv("MCP_TRANSPORT", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ValueError, match="LOG_LEVEL must be one of: critical, debug, error, info, warning"):
        ServerConfig()
