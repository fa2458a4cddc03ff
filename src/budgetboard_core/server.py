"""
MCP server for Budget Board.

Exposes budget and net worth rollups through the Model Context Protocol.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from budgetboard_core.core.exceptions import BudgetBoardError
from budgetboard_core.core.ledger import LedgerSnapshot
from budgetboard_core.tools.tools import BudgetBoardTools, create_tool_schemas

logger = logging.getLogger(__name__)


class BudgetBoardServer:
    """MCP server for Budget Board data."""

    def __init__(self, ledger_path: Optional[Path] = None):
        """
        Initialize the MCP server.

        Args:
            ledger_path: Optional path to the ledger snapshot.
                    If None, uses ~/.budgetboard/ledger.json.
        """
        self.ledger = LedgerSnapshot(ledger_path)
        self.tools = BudgetBoardTools(self.ledger)
        self.server = Server("budgetboard-core")

        self._register_handlers()

    async def handle_call(self, name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Route a tool call and format its result as text content."""
        if not self.ledger.is_available():
            error_msg = (
                f"Ledger snapshot not available at {self.ledger.ledger_path}. "
                "Export a snapshot or provide a custom ledger path."
            )
            return [TextContent(type="text", text=error_msg)]

        handlers = {
            "get_category_tree": self.tools.get_category_tree,
            "get_category_totals": self.tools.get_category_totals,
            "get_budget_summary": self.tools.get_budget_summary,
            "get_net_worth": self.tools.get_net_worth,
            "match_rules": self.tools.match_rules,
        }
        handler = handlers.get(name)
        if handler is None:
            return [TextContent(type="text", text=f"Unknown tool: {name}")]

        try:
            result = handler(**arguments)
        except (ValueError, BudgetBoardError) as e:
            return [TextContent(type="text", text=f"Error: {str(e)}")]
        except Exception as e:
            logger.exception(f"Error executing tool {name}")
            return [TextContent(type="text", text=f"Error executing tool: {str(e)}")]

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """List available tools."""
            return [
                Tool(
                    name=schema["name"],
                    description=schema["description"],
                    inputSchema=schema["inputSchema"],
                )
                for schema in create_tool_schemas()
            ]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Handle tool calls."""
            return await self.handle_call(name, arguments or {})

    async def run(self) -> None:  # pragma: no cover
        """Run the MCP server using stdio transport."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


async def run_server(ledger_path: Optional[Path] = None) -> None:  # pragma: no cover
    """
    Run the Budget Board MCP server.

    Args:
        ledger_path: Optional path to the ledger snapshot.
                If None, uses ~/.budgetboard/ledger.json.
    """
    server = BudgetBoardServer(ledger_path)
    await server.run()
