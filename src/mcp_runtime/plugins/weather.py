"""Weather plugin - forecasts from the US National Weather Service API.

Only US locations are covered by the NWS. Lookup failures are reported as
error envelopes (isError true) rather than raised.
"""

from __future__ import annotations

from typing import Any

import httpx

from mcp_runtime.config import DEFAULT_HTTP_TIMEOUT, DEFAULT_USER_AGENT
from mcp_runtime.plugins.base import PluginBase, ToolDefinition
from mcp_runtime.protocol.content import create_text_content, create_tool_response

NWS_API_BASE = "https://api.weather.gov"
FORECAST_PERIODS = 3


def _error(text: str) -> dict[str, Any]:
    return create_tool_response([create_text_content(text)], is_error=True)


def format_period(period: dict[str, Any]) -> str:
    """Format one forecast period as a text block."""
    name = period.get("name", "Unknown")
    temperature = period.get("temperature", "Unknown")
    unit = period.get("temperatureUnit", "F")
    wind_speed = period.get("windSpeed", "Unknown")
    wind_direction = period.get("windDirection", "")
    summary = period.get("shortForecast", "No forecast available")
    return (
        f"{name}:\n"
        f"Temperature: {temperature}°{unit}\n"
        f"Wind: {wind_speed} {wind_direction}\n"
        f"{summary}\n"
        "---"
    )


class WeatherPlugin(PluginBase):
    """Plugin providing the get-forecast tool."""

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.Client | None = None,
        base_url: str = NWS_API_BASE,
    ) -> None:
        """Initialize the plugin with a reusable HTTP client.

        Args:
            timeout: Request timeout in seconds.
            user_agent: User-Agent header; the NWS rejects requests without one.
            client: Pre-built client (used by tests).
            base_url: NWS API root.
        """
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(
            headers={"User-Agent": user_agent, "Accept": "application/geo+json"},
            follow_redirects=True,
            timeout=timeout,
        )

    @property
    def name(self) -> str:
        return "weather"

    @property
    def version(self) -> str:
        return "0.1.0"

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def get_tools(self) -> list[ToolDefinition]:
        return [
            ToolDefinition(
                name="get-forecast",
                description="Get weather forecast for a location",
                handler=self.get_forecast,
                parameters={
                    "type": "object",
                    "properties": {
                        "latitude": {
                            "type": "number",
                            "description": "Latitude of the location",
                        },
                        "longitude": {
                            "type": "number",
                            "description": "Longitude of the location",
                        },
                    },
                    "required": ["latitude", "longitude"],
                },
                schema_key="inputSchema",
            )
        ]

    def _get_json(self, url: str) -> Any:
        """GET a URL and decode its JSON body, or None on any failure."""
        try:
            response = self._client.get(url)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError):
            return None

    def get_forecast(self, params: dict[str, Any]) -> dict[str, Any]:
        """Get the next forecast periods for a coordinate pair.

        Args:
            params: {"latitude": number, "longitude": number}.

        Returns:
            Tool response envelope; isError is set when the lookup fails.
        """
        try:
            latitude = float(params["latitude"])
            longitude = float(params["longitude"])
        except (KeyError, TypeError, ValueError):
            return _error(
                "Invalid coordinates. Please provide valid numbers for latitude and longitude."
            )

        if not (-90 <= latitude <= 90) or not (-180 <= longitude <= 180):
            return _error(
                "Invalid coordinates. Latitude must be between -90 and 90, "
                "longitude between -180 and 180."
            )

        points = self._get_json(f"{self._base_url}/points/{latitude},{longitude}")
        if not isinstance(points, dict):
            return _error(
                "Failed to retrieve grid point data. This location may not be supported "
                "by the NWS API (only US locations are supported)."
            )

        forecast_url = (points.get("properties") or {}).get("forecast")
        if not forecast_url:
            return _error("Failed to get forecast URL from grid point data")

        forecast = self._get_json(forecast_url)
        if not isinstance(forecast, dict):
            return _error("Failed to retrieve forecast data")

        periods = (forecast.get("properties") or {}).get("periods") or []
        if not periods:
            return _error("No forecast periods available")

        formatted = "\n".join(format_period(p) for p in periods[:FORECAST_PERIODS])
        text = f"Forecast for {latitude}, {longitude}:\n\n{formatted}\n"
        return create_tool_response([create_text_content(text)])
