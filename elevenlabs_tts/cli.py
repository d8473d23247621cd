"""
Command line interface for elevenlabs-tts

`elevenlabs-tts` with no subcommand starts the MCP server on stdio. The
other commands run a single tool call and print its result, which is
handy for checking an API key or a voice without an MCP client.
"""

import asyncio
import sys
from typing import Any, Dict

import click

from .config import Settings, setup_logging
from .errors import StartupConfigError
from .server import create_dispatcher, serve
from .version import __version__


def _load_settings(debug: bool) -> Settings:
    """Load settings or exit with status 1."""
    try:
        settings = Settings.from_env()
    except StartupConfigError as e:
        click.echo(f"Error: {e}", err=True)
        click.echo("Set ELEVENLABS_API_KEY to your ElevenLabs API key and try again.", err=True)
        sys.exit(1)

    setup_logging(debug or settings.debug)
    return settings


def _run_tool(ctx: click.Context, name: str, arguments: Dict[str, Any]) -> None:
    """Run one tool call and print its result, exiting 1 on a tool error."""
    settings = _load_settings(ctx.obj['debug'])
    dispatcher = create_dispatcher(settings)
    result = asyncio.run(dispatcher.call_tool(name, arguments))

    if result.is_error:
        click.echo(result.text, err=True)
        sys.exit(1)
    click.echo(result.text)


@click.group(name='elevenlabs-tts', invoke_without_command=True)
@click.version_option(__version__, prog_name='elevenlabs-tts')
@click.option('--debug', is_flag=True, default=False, help='Enable debug logging')
@click.pass_context
def cli(ctx, debug):
    """ElevenLabs text-to-speech MCP server.

    Runs the stdio MCP server when called without a command.
    """
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug

    if ctx.invoked_subcommand is None:
        ctx.invoke(serve_command)


@cli.command('serve')
@click.pass_context
def serve_command(ctx):
    """Start the MCP server on stdio"""
    settings = _load_settings(ctx.obj['debug'])
    asyncio.run(serve(settings))


@cli.command('speak')
@click.argument('text')
@click.option('--voice-id', '-v', default=None, help='Voice ID (default: ELEVENLABS_VOICE_ID)')
@click.option('--model-id', '-m', default=None, help='Model ID (default: ELEVENLABS_MODEL)')
@click.option('--play/--no-play', default=True, help='Play the audio after generation')
@click.option('--save-path', '-o', default=None, help='Save the audio to this path')
@click.pass_context
def speak(ctx, text, voice_id, model_id, play, save_path):
    """Convert TEXT to speech"""
    arguments = {"text": text, "play": play}
    if voice_id:
        arguments["voice_id"] = voice_id
    if model_id:
        arguments["model_id"] = model_id
    if save_path:
        arguments["save_path"] = save_path
    _run_tool(ctx, "text_to_speech", arguments)


@cli.command('voices')
@click.pass_context
def voices(ctx):
    """List available voices"""
    _run_tool(ctx, "list_voices", {})


@cli.command('voice-info')
@click.argument('voice_id')
@click.pass_context
def voice_info(ctx, voice_id):
    """Show details for VOICE_ID"""
    _run_tool(ctx, "get_voice_info", {"voice_id": voice_id})


def main():
    """Main entry point for the elevenlabs-tts command"""
    cli(obj={})


if __name__ == "__main__":
    main()
