from __future__ import annotations
from enum import Enum
from typing import Optional, List, Any, Dict, Union
from pydantic import BaseModel, ConfigDict, Field
from .utils.capabilities import Capabilities

class EventKind(str, Enum):
    RUNNER_START = "runner:start"
    SUITE_START = "suite:start"
    TEST_START = "test:start"
    TEST_PENDING = "test:pending"
    TEST_PASS = "test:pass"
    TEST_FAIL = "test:fail"
    SUITE_END = "suite:end"
    RUNNER_END = "runner:end"
    END = "end"

class TestState(str, Enum):
    UNSET = ""
    PENDING = "pending"
    PASS = "pass"
    FAIL = "fail"

    __test__ = False

class _Payload(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

class RunnerConfig(_Payload):
    host: Optional[str] = None

class RunnerPayload(_Payload):
    cid: str
    specs: List[str] = Field(default_factory=list)
    capabilities: Capabilities = Field(default_factory=Capabilities)
    session_id: Optional[str] = None
    config: RunnerConfig = Field(default_factory=RunnerConfig)
    duration: Optional[float] = Field(None, description="Runner wall time in ms, sent with runner:end")

class SuitePayload(_Payload):
    cid: str
    uid: str
    title: str = ""
    parent: Optional[str] = Field(None, description="uid of the enclosing suite")

class ErrorInfo(_Payload):
    message: str = ""
    stack: Optional[str] = None

class TestPayload(_Payload):
    __test__ = False

    cid: str
    title: str
    uid: Optional[str] = None
    parent: Optional[str] = Field(None, description="title of the enclosing suite")
    parent_uid: Optional[str] = None
    state: TestState = TestState.UNSET
    err: Optional[ErrorInfo] = None

class EndPayload(_Payload):
    pass

Payload = Union[RunnerPayload, SuitePayload, TestPayload, EndPayload]

PAYLOAD_TYPES = {
    EventKind.RUNNER_START: RunnerPayload,
    EventKind.RUNNER_END: RunnerPayload,
    EventKind.SUITE_START: SuitePayload,
    EventKind.SUITE_END: SuitePayload,
    EventKind.TEST_START: TestPayload,
    EventKind.TEST_PENDING: TestPayload,
    EventKind.TEST_PASS: TestPayload,
    EventKind.TEST_FAIL: TestPayload,
    EventKind.END: EndPayload,
}

class Event(BaseModel):
    kind: EventKind
    payload: Any = None

def parse_event(data: Dict[str, Any]) -> Event:
    """Build an Event from an event-log record: {"event": "<kind>", ...payload fields}."""
    data = dict(data)
    kind = EventKind(data.pop("event"))
    return Event(kind=kind, payload=PAYLOAD_TYPES[kind].model_validate(data))
