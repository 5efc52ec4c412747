from __future__ import annotations

import json

from src.mcp_server.schemas import OperationFailure, OperationResult, OperationSuccess, TextContent, ToolResponse


def serialize_payload(payload) -> str:
    if isinstance(payload, str):
        return payload
    # keep upstream key order, no sort_keys
    return json.dumps(payload, indent=2, ensure_ascii=False)


def build_error_response(message: str) -> ToolResponse:
    return ToolResponse(content=[TextContent(text=f"Error: {message}")], is_error=True)


def build_response(result: OperationResult) -> ToolResponse:
    if isinstance(result, OperationFailure):
        return build_error_response(result.message)
    if isinstance(result, OperationSuccess):
        return ToolResponse(content=[TextContent(text=serialize_payload(result.payload))])
    raise TypeError(f"Unsupported operation result: {type(result).__name__}")
