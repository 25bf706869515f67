"""mcp-line-runtime - command-line entry point.

Builds a server from a YAML config and/or command-line options, registers
the requested built-in plugins and serves JSON-RPC over stdio.

Plugins are chosen from --plugin (repeatable), else the config file's
``plugins`` list, else ``time``. Plugins that make network calls (fetch,
weather) take their timeout and User-Agent from the config's ``http``
section.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from mcp_runtime import __version__
from mcp_runtime.config import ConfigLoadError, ServerConfig, load_config
from mcp_runtime.plugins import PLUGINS, FetchPlugin, PluginBase, WeatherPlugin
from mcp_runtime.protocol.transport import StdioTransport
from mcp_runtime.server import MCPServer, run_server

DEFAULT_PLUGINS = ["time"]


def build_plugin(name: str, config: ServerConfig) -> PluginBase:
    """Instantiate a built-in plugin by name.

    Raises:
        ConfigLoadError: If the name is not a known plugin.
    """
    plugin_cls = PLUGINS.get(name)
    if plugin_cls is None:
        known = ", ".join(sorted(PLUGINS))
        raise ConfigLoadError(f"Unknown plugin: {name} (available: {known})")

    if plugin_cls in (FetchPlugin, WeatherPlugin):
        return plugin_cls(timeout=config.http_timeout, user_agent=config.http_user_agent)
    return plugin_cls()


def build_server(args: argparse.Namespace) -> MCPServer:
    """Create and populate a server from parsed arguments.

    Raises:
        ConfigLoadError: If the config file is invalid or a plugin is unknown.
    """
    config = load_config(args.config) if args.config else ServerConfig.default()

    server = MCPServer(
        name=args.name or config.server_name,
        version=args.server_version or config.server_version,
        config=config,
    )

    for name in args.plugin or config.plugins or DEFAULT_PLUGINS:
        server.register_plugin(build_plugin(name, config))
    return server


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-line-runtime",
        description="Serve MCP-style tools over line-delimited JSON-RPC on stdio",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to configuration YAML file",
    )
    parser.add_argument(
        "--plugin",
        "-p",
        action="append",
        choices=sorted(PLUGINS),
        help="Plugin to register (repeatable; default: from config, else time)",
    )
    parser.add_argument("--name", help="Server name reported by initialize")
    parser.add_argument(
        "--server-version",
        help="Server version reported by initialize",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"mcp-line-runtime {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the server.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = create_parser().parse_args(argv)
    transport = StdioTransport()

    try:
        server = build_server(args)
    except ConfigLoadError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    if args.config:
        transport.log(f"Config loaded from: {args.config}")

    with server:
        try:
            run_server(server, transport)
        except KeyboardInterrupt:
            transport.log("Interrupted, shutting down")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            transport.log(f"Error: {e}")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
