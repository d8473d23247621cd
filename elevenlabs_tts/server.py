"""
MCP Server for ElevenLabs text-to-speech
Serves the tool catalog and tool calls over stdio
"""

import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from .client import ElevenLabsClient
from .config import Settings
from .player import AudioPlayer
from .tools import ToolDispatcher
from .version import __version__

logger = logging.getLogger("elevenlabs-tts")

SERVER_NAME = "elevenlabs-tts"


def create_dispatcher(
    settings: Settings,
    client: Optional[ElevenLabsClient] = None,
    player: Optional[AudioPlayer] = None,
) -> ToolDispatcher:
    """Wire the client and player into a dispatcher."""
    return ToolDispatcher(
        settings,
        client or ElevenLabsClient.from_settings(settings),
        player or AudioPlayer(),
    )


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Create the MCP server, delegating both handlers to the dispatcher."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        """List available text-to-speech tools"""
        return dispatcher.list_tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> CallToolResult:
        """Execute a text-to-speech tool"""
        result = await dispatcher.call_tool(name, arguments)
        return result.to_call_tool_result()

    return server


async def serve(settings: Settings) -> None:
    """Run the MCP server on stdio until the client disconnects."""
    server = create_server(create_dispatcher(settings))

    logger.info(f"Starting ElevenLabs MCP server v{__version__} on stdio")
    logger.info(f"Default voice: {settings.voice_id}, model: {settings.model_id}")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )
