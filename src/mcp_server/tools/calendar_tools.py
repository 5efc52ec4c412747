from __future__ import annotations

from src.integrations.google_workspace_client import GoogleWorkspaceClient
from src.mcp_server.arguments import (
    CreateEventArgs,
    DeleteEventArgs,
    ListCalendarsArgs,
    ListEventsArgs,
    UpdateEventArgs,
)


def _event_time(date_time: str, time_zone: str) -> dict:
    return {"dateTime": date_time, "timeZone": time_zone}


def list_calendars(client: GoogleWorkspaceClient, args: ListCalendarsArgs) -> list[dict]:
    response = client.calendar.list_calendars() or {}
    return response.get("items", [])


def list_events(client: GoogleWorkspaceClient, args: ListEventsArgs) -> list[dict]:
    # recurring events come back as individual occurrences, ordered by start
    response = client.calendar.list_events(
        args.calendar_id,
        time_min=args.time_min,
        time_max=args.time_max,
        max_results=args.max_results,
        single_events=True,
        order_by="startTime",
    ) or {}
    return response.get("items", [])


def build_event_body(args: CreateEventArgs) -> dict:
    body = {"summary": args.summary}
    if args.description is not None:
        body["description"] = args.description
    if args.location is not None:
        body["location"] = args.location
    body["start"] = _event_time(args.start_date_time, args.time_zone)
    body["end"] = _event_time(args.end_date_time, args.time_zone)
    return body


def build_event_patch(args: UpdateEventArgs) -> dict:
    patch = {}
    for key in ("summary", "description", "location"):
        value = getattr(args, key)
        if value is not None:
            patch[key] = value
    if args.start_date_time is not None:
        patch["start"] = _event_time(args.start_date_time, args.time_zone)
    if args.end_date_time is not None:
        patch["end"] = _event_time(args.end_date_time, args.time_zone)
    return patch


def create_event(client: GoogleWorkspaceClient, args: CreateEventArgs) -> dict:
    return client.calendar.insert_event(args.calendar_id, build_event_body(args))


def update_event(client: GoogleWorkspaceClient, args: UpdateEventArgs) -> dict:
    return client.calendar.patch_event(args.calendar_id, args.event_id, build_event_patch(args))


def delete_event(client: GoogleWorkspaceClient, args: DeleteEventArgs) -> str:
    client.calendar.delete_event(args.calendar_id, args.event_id)
    return f"Event {args.event_id} deleted successfully from calendar {args.calendar_id}."
