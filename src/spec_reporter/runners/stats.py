from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Callable, Protocol
import logging, time

from ..events import Event, EventKind, TestPayload, TestState, ErrorInfo
from ..utils.capabilities import Capabilities

log = logging.getLogger(__name__)

@dataclass
class TestStats:
    __test__ = False

    uid: str
    title: str
    state: TestState = TestState.UNSET
    err: Optional[ErrorInfo] = None

@dataclass
class SuiteStats:
    uid: str
    title: str
    parent: Optional[str] = None
    tests: Dict[str, TestStats] = field(default_factory=dict)

@dataclass
class FailureStats:
    cid: str
    title: str
    parent: Optional[str] = None
    err: ErrorInfo = field(default_factory=ErrorInfo)

@dataclass
class RunnerStats:
    cid: str
    specs: List[str] = field(default_factory=list)
    capabilities: Capabilities = field(default_factory=Capabilities)
    session_id: Optional[str] = None
    host: Optional[str] = None
    suites: Dict[str, SuiteStats] = field(default_factory=dict)
    started: float = 0.0
    duration: float = 0.0
    _open: List[str] = field(default_factory=list)
    @property
    def passing(self) -> int: return self._count(TestState.PASS)
    @property
    def pending(self) -> int: return self._count(TestState.PENDING)
    @property
    def failing(self) -> int: return self._count(TestState.FAIL)
    def _count(self, state: TestState) -> int:
        return sum(1 for s in self.suites.values() for t in s.tests.values() if t.state == state)

class StatsSource(Protocol):
    """What the reporter reads about a run; owned and filled by someone else."""
    def capabilities(self, cid: str) -> Capabilities: ...
    def session_id(self, cid: str) -> Optional[str]: ...
    def host(self, cid: str) -> Optional[str]: ...
    def suites(self, cid: str) -> Dict[str, SuiteStats]: ...
    def duration(self, cid: str) -> float: ...
    def failures(self) -> List[FailureStats]: ...
    def runner_count(self) -> int: ...

class RunStats:
    """In-memory StatsSource built from the lifecycle event stream."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self.runners: Dict[str, RunnerStats] = {}
        self._failures: List[FailureStats] = []

    # ---------- collection ----------
    def handle(self, event: Event) -> None:
        p = event.payload
        kind = event.kind
        if kind is EventKind.RUNNER_START:
            self.runners[p.cid] = RunnerStats(
                cid=p.cid, specs=list(p.specs), capabilities=p.capabilities,
                session_id=p.session_id, host=p.config.host, started=self.clock())
            return
        if kind is EventKind.END:
            return
        runner = self.runners.get(p.cid)
        if runner is None:
            log.warning("stats: %s for unknown worker %s ignored", kind.value, p.cid)
            return
        if kind is EventKind.RUNNER_END:
            runner.duration = p.duration if p.duration is not None else (self.clock() - runner.started) * 1000
        elif kind is EventKind.SUITE_START:
            runner.suites[p.uid] = SuiteStats(uid=p.uid, title=p.title, parent=p.parent)
            runner._open.append(p.uid)
        elif kind is EventKind.SUITE_END:
            if p.uid in runner._open:
                runner._open.remove(p.uid)
        else:
            self._record_test(runner, kind, p)

    def _record_test(self, runner: RunnerStats, kind: EventKind, p: TestPayload) -> None:
        suite_uid = p.parent_uid or (runner._open[-1] if runner._open else None)
        suite = runner.suites.get(suite_uid) if suite_uid else None
        if suite is None:
            log.warning("stats: test %r of worker %s outside any suite", p.title, runner.cid)
            return
        uid = p.uid or p.title
        test = suite.tests.setdefault(uid, TestStats(uid=uid, title=p.title))
        test.state = {EventKind.TEST_PENDING: TestState.PENDING,
                      EventKind.TEST_PASS: TestState.PASS,
                      EventKind.TEST_FAIL: TestState.FAIL}.get(kind, test.state)
        if kind is EventKind.TEST_FAIL:
            test.err = p.err or ErrorInfo()
            self._failures.append(FailureStats(cid=runner.cid, title=p.title,
                                               parent=p.parent or suite.title, err=test.err))

    # ---------- StatsSource ----------
    def capabilities(self, cid: str) -> Capabilities: return self.runners[cid].capabilities
    def session_id(self, cid: str) -> Optional[str]: return self.runners[cid].session_id
    def host(self, cid: str) -> Optional[str]: return self.runners[cid].host
    def suites(self, cid: str) -> Dict[str, SuiteStats]: return self.runners[cid].suites
    def duration(self, cid: str) -> float: return self.runners[cid].duration
    def failures(self) -> List[FailureStats]: return list(self._failures)
    def runner_count(self) -> int: return len(self.runners)
