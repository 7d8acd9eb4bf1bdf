import asyncio
import logging
import signal
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError, ToolError
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from .capabilities import CapabilityRegistry
from .config import ServerConfig
from .discovery import AnalysisDiscovery, DiscoveryError
from .prompts import PromptManager
from .typedefs import TypeGraph, render_declarations

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

load_dotenv()

SERVICE_NAME = "must-gather-mcp"
TYPE_DECLARATIONS_URI = "file:///must-gather-types.d.ts"
TYPE_DECLARATIONS_DEPTH = 2
ANALYZER_LIBRARY_URI = "file:///must-gather-lib.ts"


class MustGatherMCPServer:
    def __init__(self, config: ServerConfig) -> None:
        self.config = config
        self.server = FastMCP(SERVICE_NAME)
        self._shutdown_requested = False

        self._load_prompts()
        self._setup_discovery()

    def _load_prompts(self) -> None:
        self.prompt_manager = PromptManager()

        self.search_analysis_description = self._load_prompt_with_default(
            "tools.search_analysis",
            "Search available must-gather analysis methods by component, severity, scope, category, or keyword.",
        )
        self.get_type_definition_description = self._load_prompt_with_default(
            "tools.get_type_definition",
            "Get type definitions for must-gather data structures.",
        )
        self.type_declarations_description = self._load_prompt_with_default(
            "resources.type_declarations",
            "Type definitions for all must-gather data structures.",
        )
        self.analyzer_library_description = self._load_prompt_with_default(
            "resources.analyzer_library",
            "Analysis library for must-gather data.",
        )

    def _load_prompt_with_default(self, key: str, default: str) -> str:
        try:
            prompt = self.prompt_manager._load_prompt(key)
            if isinstance(prompt, str) and prompt.strip():
                return prompt
        except (KeyError, OSError):
            logger.warning("Prompt key missing, using fallback: %s", key)
        return default

    def _setup_discovery(self) -> None:
        self.capability_registry = CapabilityRegistry()
        self.type_graph = TypeGraph()
        usage_template = self._load_prompt_with_default(
            "usage.search_analysis",
            "Read {library_uri}, call get_type_definition for the return types, "
            "then analyze {must_gather_path} with the discovered methods.",
        )
        usage_hint = usage_template.format(
            must_gather_path=self.config.must_gather_path,
            library_uri=ANALYZER_LIBRARY_URI,
        ).strip()
        self.discovery = AnalysisDiscovery(self.capability_registry, self.type_graph, usage_hint=usage_hint)

    def signal_handler(self, sig: int, frame: Any = None) -> None:
        """Handle termination signals for graceful shutdown."""
        logger.info("Received signal %s, initiating graceful shutdown...", sig)
        self._shutdown_requested = True

    async def search_analysis(
        self,
        component: str | None = None,
        severity: str | None = None,
        scope: str | None = None,
        category: str | None = None,
        keyword: str | None = None,
        limit: int | None = None,
    ) -> str:
        self._decline_if_shutting_down("search_analysis")
        args = {
            "component": component,
            "severity": severity,
            "scope": scope,
            "category": category,
            "keyword": keyword,
            "limit": limit,
        }
        try:
            result = await asyncio.to_thread(self.discovery.search_analysis, args)
        except DiscoveryError as exc:
            raise ToolError(str(exc)) from exc
        except Exception as exc:
            logger.exception("search_analysis internal exception")
            raise ToolError(f"search_analysis failed: {exc}") from exc

        logger.info("search_analysis returned %d methods", result.total_methods)
        return result.model_dump_json(indent=2, exclude_none=True)

    async def get_type_definition(
        self,
        type_names: list[str],
        depth: int = 1,
        include_examples: bool = False,
    ) -> str:
        self._decline_if_shutting_down("get_type_definition")
        args = {"type_names": type_names, "depth": depth, "include_examples": include_examples}
        try:
            result = await asyncio.to_thread(self.discovery.get_type_definition, args)
        except DiscoveryError as exc:
            raise ToolError(str(exc)) from exc
        except Exception as exc:
            logger.exception("get_type_definition internal exception")
            raise ToolError(f"get_type_definition failed: {exc}") from exc

        return result.model_dump_json(indent=2, exclude_none=True)

    def type_declarations(self) -> str:
        return render_declarations(self.type_graph, depth=TYPE_DECLARATIONS_DEPTH)

    def analyzer_library(self) -> str:
        library_path = Path(self.config.analyzer_library_path)
        if not library_path.is_file():
            raise ResourceError(f"must-gather-lib.ts not found: {library_path}")
        return library_path.read_text(encoding="utf-8")

    def _decline_if_shutting_down(self, tool_name: str) -> None:
        if self._shutdown_requested:
            logger.info("Shutdown in progress, declining %s request", tool_name)
            raise ToolError("Server is shutting down.")

    def _register_tools(self) -> None:
        tools = [
            (self.search_analysis, "search_analysis", self.search_analysis_description),
            (self.get_type_definition, "get_type_definition", self.get_type_definition_description),
        ]

        for tool_func, tool_name, description in tools:
            self.server.tool(tool_func, name=tool_name, description=description)
            logger.info("Registered tool: %s", tool_name)

    def _register_resources(self) -> None:
        @self.server.resource(
            TYPE_DECLARATIONS_URI,
            name="Must-Gather Type Definitions",
            description=self.type_declarations_description,
            mime_type="application/typescript",
        )
        def type_declarations() -> str:
            return self.type_declarations()

        logger.info("Registered resource: %s", TYPE_DECLARATIONS_URI)

        @self.server.resource(
            ANALYZER_LIBRARY_URI,
            name="Must-Gather Analysis Library",
            description=self.analyzer_library_description,
            mime_type="application/typescript",
        )
        def analyzer_library() -> str:
            return self.analyzer_library()

        logger.info("Registered resource: %s", ANALYZER_LIBRARY_URI)

    def _register_health_endpoints(self) -> None:
        @self.server.custom_route("/health", methods=["GET"])
        async def health_check(request: Request) -> Response:
            return JSONResponse({"status": "ok", "service": SERVICE_NAME})

        @self.server.custom_route("/ready", methods=["GET"])
        async def readiness_check(request: Request) -> Response:
            if self._shutdown_requested:
                return JSONResponse({"status": "not_ready", "reason": "shutting_down"}, status_code=503)
            if not len(self.capability_registry):
                return JSONResponse({"status": "not_ready", "reason": "capability_registry_empty"}, status_code=503)
            if not self.type_graph.known_type_names():
                return JSONResponse({"status": "not_ready", "reason": "type_graph_empty"}, status_code=503)

            return JSONResponse(
                {
                    "status": "ready",
                    "service": SERVICE_NAME,
                    "capabilities": len(self.capability_registry),
                    "types": len(self.type_graph.known_type_names()),
                }
            )

    async def _run_server(self) -> None:
        if self.config.transport == "stdio":
            await self.server.run_stdio_async()
            return

        tasks = [
            self.server.run_http_async(
                transport="streamable-http",
                host=self.config.http_host,
                path="/must-gather/mcp",
                port=self.config.streamable_http_port,
            ),
            self.server.run_http_async(
                transport="sse",
                host=self.config.http_host,
                path="/must-gather/sse",
                port=self.config.sse_port,
            ),
        ]
        await asyncio.gather(*tasks)

    async def run(self) -> None:
        signal.signal(signal.SIGINT, lambda sig, frame: self.signal_handler(sig, frame))
        signal.signal(signal.SIGTERM, lambda sig, frame: self.signal_handler(sig, frame))

        self._register_tools()
        self._register_resources()
        self._register_health_endpoints()

        try:
            logger.info("Starting must-gather MCP server (transport=%s)...", self.config.transport)
            logger.info("Must-gather path: %s", self.config.must_gather_path)
            await self._run_server()
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt (CTRL+C)")
        except Exception as exc:
            logger.error("Server error: %s", exc)
            raise
        finally:
            logger.info("Server has shut down.")


def main() -> None:
    config = ServerConfig()
    logging.getLogger().setLevel(config.log_level)
    server = MustGatherMCPServer(config)
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
