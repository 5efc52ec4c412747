from __future__ import annotations

from src.integrations.google_workspace_client import GoogleWorkspaceClient
from src.mcp_server.arguments import (
    AddTaskArgs,
    DeleteTaskArgs,
    ListTaskListsArgs,
    ListTasksArgs,
    UpdateTaskArgs,
)


def list_task_lists(client: GoogleWorkspaceClient, args: ListTaskListsArgs) -> list[dict]:
    response = client.tasks.list_task_lists() or {}
    return response.get("items", [])


def list_tasks(client: GoogleWorkspaceClient, args: ListTasksArgs) -> list[dict]:
    response = client.tasks.list_tasks(args.tasklist_id) or {}
    return response.get("items", [])


def add_task(client: GoogleWorkspaceClient, args: AddTaskArgs) -> dict:
    body = {"title": args.title}
    if args.notes is not None:
        body["notes"] = args.notes
    return client.tasks.insert_task(args.tasklist_id, body)


def build_task_patch(args: UpdateTaskArgs) -> dict:
    patch = {"id": args.task_id}
    for key in ("title", "notes", "status"):
        value = getattr(args, key)
        if value is not None:
            patch[key] = value
    return patch


def update_task(client: GoogleWorkspaceClient, args: UpdateTaskArgs) -> dict:
    return client.tasks.patch_task(args.tasklist_id, args.task_id, build_task_patch(args))


def delete_task(client: GoogleWorkspaceClient, args: DeleteTaskArgs) -> str:
    client.tasks.delete_task(args.tasklist_id, args.task_id)
    return f"Task {args.task_id} deleted successfully from task list {args.tasklist_id}."
