"""Built-in plugins."""

from mcp_runtime.plugins.base import PluginBase, ToolDefinition
from mcp_runtime.plugins.fetch import FetchPlugin
from mcp_runtime.plugins.timezones import TimePlugin
from mcp_runtime.plugins.translate import TranslatePlugin
from mcp_runtime.plugins.weather import WeatherPlugin

# Plugins selectable by name from the command line or config file
PLUGINS: dict[str, type[PluginBase]] = {
    "time": TimePlugin,
    "fetch": FetchPlugin,
    "translate": TranslatePlugin,
    "weather": WeatherPlugin,
}

__all__ = [
    "PLUGINS",
    "FetchPlugin",
    "PluginBase",
    "TimePlugin",
    "ToolDefinition",
    "TranslatePlugin",
    "WeatherPlugin",
]
