from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from src.config import Settings, get_settings
from src.integrations.google_workspace_client import GoogleWorkspaceClient, RemoteServiceError
from src.mcp_server.arguments import ToolArguments, validate_arguments
from src.mcp_server.catalog import ToolName, get_tool
from src.mcp_server.envelope import build_error_response, build_response
from src.mcp_server.errors import ErrorKind, InvalidParamsError, MethodNotFoundError
from src.mcp_server.schemas import (
    OperationFailure,
    OperationResult,
    OperationSuccess,
    ToolCallRequest,
    ToolResponse,
)
from src.mcp_server.tools import calendar_tools, task_tools

logger = logging.getLogger(__name__)

Handler = Callable[[GoogleWorkspaceClient, Any], Any]

REGISTRY: dict[ToolName, Handler] = {
    ToolName.LIST_TASK_LISTS: task_tools.list_task_lists,
    ToolName.LIST_TASKS: task_tools.list_tasks,
    ToolName.ADD_TASK: task_tools.add_task,
    ToolName.UPDATE_TASK: task_tools.update_task,
    ToolName.DELETE_TASK: task_tools.delete_task,
    ToolName.LIST_CALENDARS: calendar_tools.list_calendars,
    ToolName.LIST_EVENTS: calendar_tools.list_events,
    ToolName.CREATE_EVENT: calendar_tools.create_event,
    ToolName.UPDATE_EVENT: calendar_tools.update_event,
    ToolName.DELETE_EVENT: calendar_tools.delete_event,
}

_unhandled = set(ToolName) - set(REGISTRY)
if _unhandled:
    raise RuntimeError(f"No handler registered for tools: {sorted(t.value for t in _unhandled)}")


class MCPServer:
    def __init__(self, client: GoogleWorkspaceClient, settings: Settings | None = None) -> None:
        self.client = client
        self.settings = settings or get_settings()
        self.registry = REGISTRY

    def dispatch(self, tool_name: str, arguments: ToolArguments) -> OperationResult:
        try:
            handler = self.registry[ToolName(tool_name)]
        except ValueError as exc:
            raise MethodNotFoundError(f"Unknown tool: {tool_name}") from exc

        try:
            payload = handler(self.client, arguments)
        except RemoteServiceError as exc:
            logger.warning(
                "Tool call failed upstream",
                extra={"tool": tool_name, "kind": exc.kind.value, "status": exc.status, "error": exc.message},
            )
            return OperationFailure(ErrorKind.REMOTE_OPERATION_FAILED, exc.message)
        return OperationSuccess(payload)

    def execute(self, request: ToolCallRequest) -> ToolResponse:
        if get_tool(request.name) is None:
            logger.warning("Unknown tool requested", extra={"tool": request.name})
            raise MethodNotFoundError(f"Unknown tool: {request.name}")

        logger.info("Tool call", extra={"tool": request.name})
        try:
            arguments = validate_arguments(request.name, request.arguments, self.settings)
        except InvalidParamsError as exc:
            logger.info("Tool call rejected", extra={"tool": request.name, "error": exc.message})
            return build_error_response(exc.message)

        try:
            result = self.dispatch(request.name, arguments)
        except MethodNotFoundError:
            raise
        except Exception as exc:
            logger.exception("Unexpected error in tool handler", extra={"tool": request.name})
            return build_error_response(str(exc) or "An unknown error occurred.")
        return build_response(result)

    def close(self) -> None:
        close = getattr(self.client, "close", None)
        if callable(close):
            close()
