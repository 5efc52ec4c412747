from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Union

from src.config import Settings, get_settings
from src.mcp_server.catalog import ToolName, get_tool
from src.mcp_server.errors import InvalidParamsError, MethodNotFoundError


def _arg(wire: str, *, required: bool = False, setting: str | None = None):
    """Declare a tool argument by its camelCase wire name.

    ``setting`` names the Settings attribute used when the caller omits the
    field or sends null, "" or 0.
    """
    metadata = {"wire": wire, "setting": setting}
    if required:
        return field(metadata=metadata)
    return field(default=None, metadata=metadata)


@dataclass(frozen=True)
class ListTaskListsArgs:
    tool: ClassVar[ToolName] = ToolName.LIST_TASK_LISTS


@dataclass(frozen=True)
class ListTasksArgs:
    tool: ClassVar[ToolName] = ToolName.LIST_TASKS
    tasklist_id: str = _arg("tasklistId", required=True)


@dataclass(frozen=True)
class AddTaskArgs:
    tool: ClassVar[ToolName] = ToolName.ADD_TASK
    tasklist_id: str = _arg("tasklistId", required=True)
    title: str = _arg("title", required=True)
    notes: str | None = _arg("notes")


@dataclass(frozen=True)
class UpdateTaskArgs:
    tool: ClassVar[ToolName] = ToolName.UPDATE_TASK
    tasklist_id: str = _arg("tasklistId", required=True)
    task_id: str = _arg("taskId", required=True)
    title: str | None = _arg("title")
    notes: str | None = _arg("notes")
    status: str | None = _arg("status")


@dataclass(frozen=True)
class DeleteTaskArgs:
    tool: ClassVar[ToolName] = ToolName.DELETE_TASK
    tasklist_id: str = _arg("tasklistId", required=True)
    task_id: str = _arg("taskId", required=True)


@dataclass(frozen=True)
class ListCalendarsArgs:
    tool: ClassVar[ToolName] = ToolName.LIST_CALENDARS


@dataclass(frozen=True)
class ListEventsArgs:
    tool: ClassVar[ToolName] = ToolName.LIST_EVENTS
    calendar_id: str = _arg("calendarId", setting="default_calendar_id")
    time_min: str | None = _arg("timeMin")
    time_max: str | None = _arg("timeMax")
    max_results: int = _arg("maxResults", setting="default_max_results")


@dataclass(frozen=True)
class CreateEventArgs:
    tool: ClassVar[ToolName] = ToolName.CREATE_EVENT
    summary: str = _arg("summary", required=True)
    start_date_time: str = _arg("startDateTime", required=True)
    end_date_time: str = _arg("endDateTime", required=True)
    calendar_id: str = _arg("calendarId", setting="default_calendar_id")
    description: str | None = _arg("description")
    location: str | None = _arg("location")
    time_zone: str = _arg("timeZone", setting="default_time_zone")


@dataclass(frozen=True)
class UpdateEventArgs:
    tool: ClassVar[ToolName] = ToolName.UPDATE_EVENT
    event_id: str = _arg("eventId", required=True)
    calendar_id: str = _arg("calendarId", setting="default_calendar_id")
    summary: str | None = _arg("summary")
    description: str | None = _arg("description")
    start_date_time: str | None = _arg("startDateTime")
    end_date_time: str | None = _arg("endDateTime")
    location: str | None = _arg("location")
    time_zone: str = _arg("timeZone", setting="default_time_zone")


@dataclass(frozen=True)
class DeleteEventArgs:
    tool: ClassVar[ToolName] = ToolName.DELETE_EVENT
    event_id: str = _arg("eventId", required=True)
    calendar_id: str = _arg("calendarId", setting="default_calendar_id")


ToolArguments = Union[
    ListTaskListsArgs,
    ListTasksArgs,
    AddTaskArgs,
    UpdateTaskArgs,
    DeleteTaskArgs,
    ListCalendarsArgs,
    ListEventsArgs,
    CreateEventArgs,
    UpdateEventArgs,
    DeleteEventArgs,
]

ARGUMENT_TYPES: dict[ToolName, type] = {
    cls.tool: cls
    for cls in (
        ListTaskListsArgs,
        ListTasksArgs,
        AddTaskArgs,
        UpdateTaskArgs,
        DeleteTaskArgs,
        ListCalendarsArgs,
        ListEventsArgs,
        CreateEventArgs,
        UpdateEventArgs,
        DeleteEventArgs,
    )
}

_missing_types = set(ToolName) - set(ARGUMENT_TYPES)
if _missing_types:
    raise RuntimeError(f"No argument type for tools: {sorted(t.value for t in _missing_types)}")


def validate_arguments(
    tool_name: str,
    raw_arguments: Any,
    settings: Settings | None = None,
) -> ToolArguments:
    """Check an argument bag against the tool's schema and resolve defaults.

    Only presence of required fields is enforced. Values are not coerced and
    unknown keys are ignored; a null value counts as omitted. Defaulted fields
    also fall back to their setting when given an empty value ("" or 0).
    """
    descriptor = get_tool(tool_name)
    if descriptor is None:
        raise MethodNotFoundError(f"Unknown tool: {tool_name}")

    required = descriptor.required
    if raw_arguments is None:
        if required:
            raise InvalidParamsError(f"Missing arguments for {tool_name}")
        raw_arguments = {}
    if not isinstance(raw_arguments, Mapping):
        raise InvalidParamsError(f"Arguments for {tool_name} must be an object")

    missing = [name for name in required if raw_arguments.get(name) is None]
    if missing:
        raise InvalidParamsError(f"Missing required argument(s) for {tool_name}: {', '.join(missing)}")

    cfg = settings or get_settings()
    arg_type = ARGUMENT_TYPES[ToolName(tool_name)]
    values: dict[str, Any] = {}
    for arg in fields(arg_type):
        value = raw_arguments.get(arg.metadata["wire"])
        setting = arg.metadata["setting"]
        if setting and not value:
            value = getattr(cfg, setting)
        values[arg.name] = value
    return arg_type(**values)
