from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from src.mcp_server.errors import ErrorKind


class ToolDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: dict = Field(alias="inputSchema")

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(self.input_schema.get("required", ()))


class ToolListResponse(BaseModel):
    tools: list[ToolDescriptor]


class ToolCallRequest(BaseModel):
    name: str
    # shape is checked by validate_arguments
    arguments: Any = None


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent]
    is_error: bool = Field(default=False, alias="isError")


@dataclass(frozen=True)
class OperationSuccess:
    payload: Any


@dataclass(frozen=True)
class OperationFailure:
    kind: ErrorKind
    message: str


OperationResult = Union[OperationSuccess, OperationFailure]
