import os

_TRANSPORTS = {"stdio", "http"}
_LOG_LEVELS = {"critical", "error", "warning", "info", "debug"}


class ServerConfig:
    def __init__(self) -> None:
        self.must_gather_path = os.getenv("MUST_GATHER_PATH") or os.getcwd()
        self.analyzer_library_path = os.getenv("MUST_GATHER_LIB_PATH") or os.path.join(
            os.getcwd(), "must-gather-lib.ts"
        )
        self.transport = self._get_choice_env("MCP_TRANSPORT", "stdio", _TRANSPORTS)
        self.http_host = os.getenv("MCP_HTTP_HOST", "0.0.0.0")
        self.sse_port = int(os.getenv("MCP_SSE_PORT", "8000"))
        self.streamable_http_port = int(os.getenv("MCP_STREAMABLE_HTTP_PORT", "8080"))
        self.log_level = self._get_choice_env("LOG_LEVEL", "info", _LOG_LEVELS).upper()

    @staticmethod
    def _get_choice_env(key: str, default: str, choices: set[str]) -> str:
        """Get an environment variable restricted to a fixed set of values."""
        value = (os.getenv(key) or default).strip().lower()
        if value not in choices:
            allowed = ", ".join(sorted(choices))
            raise ValueError(f"Environment variable {key} must be one of: {allowed} (got {value!r})")
        return value
