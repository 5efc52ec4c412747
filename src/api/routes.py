from __future__ import annotations

import logging
import threading

from fastapi import APIRouter, HTTPException

from src.config import settings
from src.integrations.google_credentials import CredentialsError
from src.integrations.google_workspace_client import GoogleWorkspaceClient
from src.mcp_server.catalog import get_tool, list_tools
from src.mcp_server.envelope import build_error_response
from src.mcp_server.errors import MethodNotFoundError
from src.mcp_server.schemas import ToolCallRequest, ToolListResponse, ToolResponse
from src.mcp_server.server import MCPServer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["google-tasks-calendar"])

_server: MCPServer | None = None
_server_lock = threading.Lock()


def get_mcp_server() -> MCPServer:
    global _server
    with _server_lock:
        if _server is None:
            _server = MCPServer(client=GoogleWorkspaceClient.from_settings(settings), settings=settings)
        return _server


def close_mcp_server() -> None:
    global _server
    with _server_lock:
        if _server is not None:
            _server.close()
            _server = None


@router.get("/health")
def health() -> dict:
    return {"status": "ok", "name": settings.server_name, "version": settings.server_version}


@router.get("/tools", response_model=ToolListResponse)
def get_tools():
    return ToolListResponse(tools=list_tools())


@router.post("/tools/call", response_model=ToolResponse)
def call_tool(payload: ToolCallRequest):
    # unknown tools are rejected before the remote client is built
    if get_tool(payload.name) is None:
        raise HTTPException(status_code=404, detail=MethodNotFoundError(f"Unknown tool: {payload.name}").as_dict())
    try:
        server = get_mcp_server()
    except CredentialsError as exc:
        logger.error("Google credentials are not configured", extra={"tool": payload.name, "error": str(exc)})
        return build_error_response(str(exc))
    try:
        return server.execute(payload)
    except MethodNotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.as_dict()) from exc
