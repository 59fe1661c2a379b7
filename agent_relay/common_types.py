# agent_relay/common_types.py

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag


# --- Parts ---

class TextPart(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: Literal["text"] = "text"
    text: str = ""
    metadata: dict[str, Any] | None = None


class FileContent(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    mimeType: str | None = None
    bytes: str | None = None  # base64
    uri: str | None = None


class FilePart(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: Literal["file"] = "file"
    file: FileContent
    metadata: dict[str, Any] | None = None


class DataPart(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: Literal["data"] = "data"
    data: dict[str, Any]
    metadata: dict[str, Any] | None = None


class OpaquePart(BaseModel):
    """A part whose type this package does not know. Kept as received."""

    model_config = ConfigDict(extra="allow")

    type: str | None = None


KNOWN_PART_TYPES = ("text", "file", "data")


def _part_tag(value: Any) -> str:
    if isinstance(value, dict):
        tag = value.get("type")
        has_text = "text" in value
    else:
        tag = getattr(value, "type", None)
        has_text = hasattr(value, "text")
    if tag is None:
        # Untagged parts predate the "type" field; they are text if they carry text.
        return "text" if has_text else "other"
    return tag if tag in KNOWN_PART_TYPES else "other"


Part = Annotated[
    Union[
        Annotated[TextPart, Tag("text")],
        Annotated[FilePart, Tag("file")],
        Annotated[DataPart, Tag("data")],
        Annotated[OpaquePart, Tag("other")],
    ],
    Discriminator(_part_tag),
]


class Message(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: str  # "user" or "agent"
    parts: list[Part]
    metadata: dict[str, Any] | None = None


# --- Tasks ---

class TaskState(str, Enum):
    SUBMITTED = "submitted"
    WORKING = "working"
    INPUT_REQUIRED = "input-required"
    COMPLETED = "completed"
    CANCELED = "canceled"
    FAILED = "failed"
    UNKNOWN = "unknown"


class TaskStatus(BaseModel):
    state: TaskState
    message: Message | None = None
    timestamp: datetime | None = None


class Artifact(BaseModel):
    name: str | None = None
    description: str | None = None
    parts: list[Part]
    metadata: dict[str, Any] | None = None
    index: int = 0


class Task(BaseModel):
    id: str
    sessionId: str | None = None
    status: TaskStatus
    artifacts: list[Artifact] | None = None
    history: list[Message] | None = None
    metadata: dict[str, Any] | None = None


class TaskSendParams(BaseModel):
    id: str
    sessionId: str | None = None
    message: Message
    acceptedOutputModes: list[str] | None = None
    historyLength: int | None = None
    metadata: dict[str, Any] | None = None


# --- JSON-RPC envelopes ---

class JSONRPCError(BaseModel):
    code: int
    message: str
    data: Any | None = None


class JSONRPCRequest(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    id: str = Field(default_factory=lambda: uuid4().hex)
    method: str
    params: dict[str, Any] | None = None


class SendTaskRequest(JSONRPCRequest):
    method: Literal["tasks/send"] = "tasks/send"
    params: TaskSendParams


class SendTaskResponse(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    id: str | int | None = None
    result: Task | None = None
    error: JSONRPCError | None = None


# --- Agent card ---

class AgentProvider(BaseModel):
    organization: str
    url: str | None = None


class AgentCapabilities(BaseModel):
    streaming: bool = False
    pushNotifications: bool = False
    stateTransitionHistory: bool = False


class AgentSkill(BaseModel):
    id: str
    name: str
    description: str | None = None
    tags: list[str] | None = None
    examples: list[str] | None = None


class AgentCard(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    description: str | None = None
    url: str | None = None
    version: str | None = None
    provider: AgentProvider | None = None
    documentationUrl: str | None = None
    capabilities: AgentCapabilities = Field(default_factory=AgentCapabilities)
    skills: list[AgentSkill] = Field(default_factory=list)
    defaultInputModes: list[str] = Field(default_factory=lambda: ["text"])
    defaultOutputModes: list[str] = Field(default_factory=lambda: ["text"])


# --- Client errors ---

class A2AClientError(Exception):
    pass


class A2AClientHTTPError(A2AClientError):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP Error {status_code}: {message}")


class A2AClientConnectionError(A2AClientError):
    pass


class A2AClientJSONError(A2AClientError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(f"JSON Error: {message}")


class A2AClientJSONRPCError(A2AClientError):
    def __init__(self, error: JSONRPCError):
        self.code = error.code
        self.message = error.message
        self.data = error.data
        super().__init__(f"JSON-RPC Error {error.code}: {error.message}")
