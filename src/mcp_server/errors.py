from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_PARAMS = "InvalidParams"
    METHOD_NOT_FOUND = "MethodNotFound"
    REMOTE_OPERATION_FAILED = "RemoteOperationFailed"


# JSON-RPC 2.0 error codes, as used by MCP
ERROR_CODES = {
    ErrorKind.INVALID_PARAMS: -32602,
    ErrorKind.METHOD_NOT_FOUND: -32601,
    ErrorKind.REMOTE_OPERATION_FAILED: -32603,
}


class ToolError(Exception):
    kind: ErrorKind = ErrorKind.REMOTE_OPERATION_FAILED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> int:
        return ERROR_CODES[self.kind]

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class InvalidParamsError(ToolError):
    kind = ErrorKind.INVALID_PARAMS


class MethodNotFoundError(ToolError):
    kind = ErrorKind.METHOD_NOT_FOUND
