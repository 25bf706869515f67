"""Time plugin - current time and timezone conversion.

Timezones are IANA names (e.g. "UTC", "America/New_York") resolved with
zoneinfo.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from mcp_runtime.plugins.base import PluginBase, ToolDefinition
from mcp_runtime.protocol.content import (
    create_json_content,
    create_text_content,
    create_tool_response,
)

TIME_INPUT_FORMAT = "%Y-%m-%dT%H:%M:%S"
TIME_OUTPUT_FORMAT = "%Y-%m-%d %H:%M:%S"

TIME_ZONE_HELP = """# Time Zone Help

Time zones are regions of the globe that observe a uniform standard time for legal, \
commercial, and social purposes.

Common time zones include:
- UTC (Coordinated Universal Time)
- America/New_York (Eastern Time)
- America/Los_Angeles (Pacific Time)
- Europe/London (British Time)
- Asia/Tokyo (Japan Time)
"""


def _require(params: dict[str, Any], *names: str) -> None:
    for name in names:
        if name not in params:
            raise ValueError(f"Missing required parameter: {name}")


def _zone(name: Any) -> ZoneInfo:
    try:
        return ZoneInfo(str(name))
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Invalid timezone: {name}") from e


def _is_dst(moment: datetime) -> bool:
    offset = moment.dst()
    return bool(offset) if offset is not None else False


def get_current_time(params: dict[str, Any]) -> dict[str, Any]:
    """Get the current time in the requested timezone.

    Args:
        params: {"timezone": IANA timezone name}.

    Returns:
        Tool response with a json item and a text item.

    Raises:
        ValueError: If the timezone is missing or unknown.
    """
    _require(params, "timezone")
    tz_name = params["timezone"]
    now = datetime.now(_zone(tz_name))
    formatted = now.strftime(TIME_OUTPUT_FORMAT)

    return create_tool_response(
        [
            create_json_content(
                {"time": formatted, "timezone": str(tz_name), "is_dst": _is_dst(now)}
            ),
            create_text_content(f"The current time in {tz_name} is {formatted}"),
        ]
    )


def convert_time(params: dict[str, Any]) -> dict[str, Any]:
    """Convert a wall-clock time from one timezone to another.

    Args:
        params: {"time": "YYYY-MM-DDTHH:MM:SS", "source_timezone", "target_timezone"}.

    Returns:
        Tool response with a json item and a text item.

    Raises:
        ValueError: On missing parameters, unknown timezones or bad time format.
    """
    _require(params, "time", "source_timezone", "target_timezone")
    source_tz = _zone(params["source_timezone"])
    target_tz = _zone(params["target_timezone"])

    try:
        naive = datetime.strptime(str(params["time"]), TIME_INPUT_FORMAT)
    except ValueError as e:
        raise ValueError("Invalid time format. Expected format: YYYY-MM-DDTHH:MM:SS") from e

    source_time = naive.replace(tzinfo=source_tz)
    target_time = source_time.astimezone(target_tz)

    source_offset = source_time.utcoffset()
    target_offset = target_time.utcoffset()
    if source_offset is None or target_offset is None:
        raise ValueError("Time zone offset could not be determined")
    diff_hours = round((target_offset - source_offset).total_seconds() / 3600, 2)

    result = {
        "source": {
            "timezone": params["source_timezone"],
            "time": source_time.strftime(TIME_OUTPUT_FORMAT),
            "is_dst": _is_dst(source_time),
        },
        "target": {
            "timezone": params["target_timezone"],
            "time": target_time.strftime(TIME_OUTPUT_FORMAT),
            "is_dst": _is_dst(target_time),
        },
        "time_difference": f"{diff_hours:+g}h",
    }

    text = (
        "Time Conversion:\n"
        f"- {result['source']['time']} in {params['source_timezone']}\n"
        f"- {result['target']['time']} in {params['target_timezone']}\n"
        f"- Difference: {diff_hours:g} hours"
    )

    return create_tool_response([create_json_content(result), create_text_content(text)])


class TimePlugin(PluginBase):
    """Plugin providing get_current_time and convert_time."""

    @property
    def name(self) -> str:
        return "time"

    @property
    def version(self) -> str:
        return "0.1.0"

    def get_tools(self) -> list[ToolDefinition]:
        return [
            ToolDefinition(
                name="get_current_time",
                description="Get current time in a specific timezone",
                handler=get_current_time,
                parameters={
                    "type": "object",
                    "properties": {
                        "timezone": {
                            "type": "string",
                            "description": "Timezone name (e.g., 'UTC', 'America/New_York')",
                        }
                    },
                    "required": ["timezone"],
                },
            ),
            ToolDefinition(
                name="convert_time",
                description="Convert time between timezones",
                handler=convert_time,
                parameters={
                    "type": "object",
                    "properties": {
                        "source_timezone": {"type": "string", "description": "Source timezone"},
                        "target_timezone": {"type": "string", "description": "Target timezone"},
                        "time": {
                            "type": "string",
                            "description": "Time to convert (ISO format, YYYY-MM-DDTHH:MM:SS)",
                        },
                    },
                    "required": ["source_timezone", "target_timezone", "time"],
                },
            ),
        ]

    def get_prompts(self) -> dict[str, Any]:
        return {"time_zone_help": {"type": "text", "text": TIME_ZONE_HELP}}
