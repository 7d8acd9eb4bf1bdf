"""Progressive disclosure MCP server for must-gather analysis."""

__version__ = "2.0.0"
