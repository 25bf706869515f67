"""Line-oriented JSON-RPC 2.0 runtime for MCP-style tool servers and clients."""

from mcp_runtime.client import ClientError, MCPClient, ProcessStream, ServerError, extract_content
from mcp_runtime.config import ConfigLoadError, ServerConfig, load_config
from mcp_runtime.registry import Registry
from mcp_runtime.server import MCPServer, run_server

__version__ = "0.1.0"

__all__ = [
    "ClientError",
    "ConfigLoadError",
    "MCPClient",
    "MCPServer",
    "ProcessStream",
    "Registry",
    "ServerConfig",
    "ServerError",
    "__version__",
    "extract_content",
    "load_config",
    "run_server",
]
