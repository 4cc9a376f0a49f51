from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..events import RunnerPayload, SuitePayload
from .indent import IndentTracker
from .symbols import Symbols

class UnknownWorkerError(LookupError):
    pass

@dataclass
class Results:
    passing: int = 0
    pending: int = 0
    failing: int = 0
    def items(self):
        return [("passing", self.passing), ("pending", self.pending), ("failing", self.failing)]

@dataclass
class WorkerState:
    cid: str
    specs: List[str] = field(default_factory=list)
    results: Results = field(default_factory=Results)

@dataclass
class RealtimeContext:
    """What real-time output is currently attached to; one per reporter."""
    runner: Optional[RunnerPayload] = None
    suite: Optional[SuitePayload] = None
    cid: Optional[str] = None
    preface: str = ""
    header_printed: bool = False

@dataclass
class ReportState:
    workers: Dict[str, WorkerState] = field(default_factory=dict)
    indents: IndentTracker = field(default_factory=IndentTracker)
    context: RealtimeContext = field(default_factory=RealtimeContext)
    symbols: Symbols = field(default_factory=Symbols)

    def start_worker(self, cid: str, specs: List[str]) -> WorkerState:
        self.indents.start_worker(cid)
        self.workers[cid] = WorkerState(cid=cid, specs=list(specs))
        return self.workers[cid]

    def worker(self, cid: str) -> WorkerState:
        try:
            return self.workers[cid]
        except KeyError:
            raise UnknownWorkerError(f"no runner:start seen for worker {cid!r}") from None
