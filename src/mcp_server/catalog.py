from __future__ import annotations

from enum import Enum

from src.mcp_server.schemas import ToolDescriptor


class ToolName(str, Enum):
    LIST_TASK_LISTS = "list_task_lists"
    LIST_TASKS = "list_tasks"
    ADD_TASK = "add_task"
    UPDATE_TASK = "update_task"
    DELETE_TASK = "delete_task"
    LIST_CALENDARS = "list_calendars"
    LIST_EVENTS = "list_events"
    CREATE_EVENT = "create_event"
    UPDATE_EVENT = "update_event"
    DELETE_EVENT = "delete_event"


def _string(description: str, **extra) -> dict:
    return {"type": "string", "description": description, **extra}


def _schema(properties: dict | None = None, required: list[str] | None = None) -> dict:
    schema: dict = {"type": "object", "properties": properties or {}}
    if required:
        schema["required"] = required
    return schema


def _tool(name: ToolName, description: str, schema: dict) -> ToolDescriptor:
    return ToolDescriptor(name=name.value, description=description, input_schema=schema)


_CALENDAR_ID = "Defaults to primary calendar."

TOOL_CATALOG: tuple[ToolDescriptor, ...] = (
    _tool(
        ToolName.LIST_TASK_LISTS,
        "List all Google Task lists for the authenticated user.",
        _schema(),
    ),
    _tool(
        ToolName.LIST_TASKS,
        "List tasks within a specific Google Task list.",
        _schema(
            {"tasklistId": _string("The ID of the task list to retrieve tasks from.")},
            ["tasklistId"],
        ),
    ),
    _tool(
        ToolName.ADD_TASK,
        "Add a new task to a specific Google Task list.",
        _schema(
            {
                "tasklistId": _string("The ID of the task list to add the task to."),
                "title": _string("The title of the new task."),
                "notes": _string("Optional notes for the task."),
            },
            ["tasklistId", "title"],
        ),
    ),
    _tool(
        ToolName.UPDATE_TASK,
        "Update an existing task in a Google Task list.",
        _schema(
            {
                "tasklistId": _string("The ID of the task list containing the task."),
                "taskId": _string("The ID of the task to update."),
                "title": _string("The new title for the task (optional)."),
                "notes": _string("New notes for the task (optional)."),
                "status": _string(
                    "The status of the task (needsAction or completed) (optional).",
                    enum=["needsAction", "completed"],
                ),
            },
            ["tasklistId", "taskId"],
        ),
    ),
    _tool(
        ToolName.DELETE_TASK,
        "Delete a task from a Google Task list.",
        _schema(
            {
                "tasklistId": _string("The ID of the task list containing the task."),
                "taskId": _string("The ID of the task to delete."),
            },
            ["tasklistId", "taskId"],
        ),
    ),
    _tool(
        ToolName.LIST_CALENDARS,
        "List all Google Calendars for the authenticated user.",
        _schema(),
    ),
    _tool(
        ToolName.LIST_EVENTS,
        "List events from a specific Google Calendar.",
        _schema(
            {
                "calendarId": _string(f"The ID of the calendar to retrieve events from. {_CALENDAR_ID}"),
                "timeMin": _string(
                    "Lower bound (inclusive) for an event's end time to filter by (RFC3339 timestamp)."
                ),
                "timeMax": _string(
                    "Upper bound (exclusive) for an event's start time to filter by (RFC3339 timestamp)."
                ),
                "maxResults": {"type": "number", "description": "Maximum number of events returned. Default is 10."},
            }
        ),
    ),
    _tool(
        ToolName.CREATE_EVENT,
        "Create a new event in Google Calendar.",
        _schema(
            {
                "calendarId": _string(f"The ID of the calendar to create the event in. {_CALENDAR_ID}"),
                "summary": _string("The title/summary of the event."),
                "description": _string("Description of the event."),
                "startDateTime": _string('Start date and time (RFC3339 format, e.g., "2025-06-10T09:30:00+08:00").'),
                "endDateTime": _string('End date and time (RFC3339 format, e.g., "2025-06-10T10:30:00+08:00").'),
                "location": _string("Location of the event."),
                "timeZone": _string('Time zone for the event (e.g., "Asia/Kuala_Lumpur").'),
            },
            ["summary", "startDateTime", "endDateTime"],
        ),
    ),
    _tool(
        ToolName.UPDATE_EVENT,
        "Update an existing event in Google Calendar.",
        _schema(
            {
                "calendarId": _string(f"The ID of the calendar containing the event. {_CALENDAR_ID}"),
                "eventId": _string("The ID of the event to update."),
                "summary": _string("The new title/summary of the event."),
                "description": _string("New description of the event."),
                "startDateTime": _string("New start date and time (RFC3339 format)."),
                "endDateTime": _string("New end date and time (RFC3339 format)."),
                "location": _string("New location of the event."),
                "timeZone": _string("Time zone for the event."),
            },
            ["eventId"],
        ),
    ),
    _tool(
        ToolName.DELETE_EVENT,
        "Delete an event from Google Calendar.",
        _schema(
            {
                "calendarId": _string(f"The ID of the calendar containing the event. {_CALENDAR_ID}"),
                "eventId": _string("The ID of the event to delete."),
            },
            ["eventId"],
        ),
    ),
)

_BY_NAME = {tool.name: tool for tool in TOOL_CATALOG}


def list_tools() -> list[ToolDescriptor]:
    return list(TOOL_CATALOG)


def get_tool(name: str) -> ToolDescriptor | None:
    return _BY_NAME.get(name)
