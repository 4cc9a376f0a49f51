from __future__ import annotations
from collections import deque
from typing import Callable, Deque, Dict, Optional, Union
import logging, threading

from ..config import ReporterConfig
from ..events import Event, EventKind, Payload, RunnerPayload, SuitePayload, TestPayload, TestState
from ..runners.stats import StatsSource
from .console import ConsoleSink
from .render import Renderer
from .state import ReportState, Results, UnknownWorkerError
from .symbols import Symbols, Theme

log = logging.getLogger(__name__)

class SpecReporter:
    """
    Hierarchical spec report for a multi-worker run.

    With max_instances == 1 output streams as events arrive (real-time
    mode); otherwise every worker's block is printed at once on its
    runner:end. Real-time mode assumes a single active worker and does not
    check it: concurrent workers interleave their lines.

    Failure numbers in real-time mode keep counting across the whole run,
    while a batched block always starts again at 1.
    """

    def __init__(self, stats: StatsSource, config: Optional[ReporterConfig] = None,
                 sink: Optional[ConsoleSink] = None, epilogue: Optional[Callable[[], None]] = None):
        self.config = config or ReporterConfig()
        self.stats = stats
        self.sink = sink or ConsoleSink()
        self.realtime = self.config.realtime
        self.state = ReportState(symbols=Symbols(ok=self.config.symbols.ok))
        self.theme = Theme(self.config.styles(), enabled=self.config.color)
        self.renderer = Renderer(stats, self.theme, self.state.symbols, self.state.indents)
        self.epilogue = epilogue or self.print_totals

        self._queue: Deque[Event] = deque()
        self._lock = threading.RLock()
        self._draining = False
        self.reactions: Dict[EventKind, Callable] = {
            EventKind.RUNNER_START: self.on_runner_start,
            EventKind.SUITE_START: self.on_suite_start,
            EventKind.TEST_PENDING: lambda test: self.on_test(test, TestState.PENDING),
            EventKind.TEST_PASS: lambda test: self.on_test(test, TestState.PASS),
            EventKind.TEST_FAIL: lambda test: self.on_test(test, TestState.FAIL),
            EventKind.SUITE_END: self.on_suite_end,
            EventKind.RUNNER_END: self.on_runner_end,
            EventKind.END: lambda _payload: self.on_end(),
        }

    # ---------- dispatch ----------
    def emit(self, kind: Union[EventKind, str], payload: Optional[Payload] = None) -> None:
        """
        Queue one event and deliver everything pending, one handler at a time.
        A failing handler does not strand the rest of the queue: draining
        continues and the first error is raised once the queue is empty.
        """
        self._queue.append(Event(kind=EventKind(kind), payload=payload))
        with self._lock:
            if self._draining:
                return
            self._draining = True
            error = None
            try:
                while self._queue:
                    event = self._queue.popleft()
                    try:
                        self.dispatch(event)
                    except Exception as e:
                        log.error("%s handler failed: %s", event.kind.value, e)
                        if error is None:
                            error = e
            finally:
                self._draining = False
            if error is not None:
                raise error

    def handle(self, event: Event) -> None:
        self.emit(event.kind, event.payload)

    def dispatch(self, event: Event) -> None:
        reaction = self.reactions.get(event.kind)
        if reaction is None:
            return
        try:
            reaction(event.payload)
        except UnknownWorkerError as e:
            log.warning("%s: %s dropped", e, event.kind.value)

    # ---------- reactions ----------
    def on_runner_start(self, runner: RunnerPayload) -> None:
        self.state.start_worker(runner.cid, runner.specs)
        if self.realtime:
            self.state.context.runner = runner
            self.state.context.header_printed = False

    def on_suite_start(self, suite: SuitePayload) -> None:
        self.state.worker(suite.cid)
        self.state.indents.suite_start(suite.cid, suite.uid)
        if self.realtime:
            ctx = self.state.context
            ctx.suite = suite
            if not ctx.header_printed:
                self.print_header(ctx.runner)
            self.sink.print(self.renderer.suite_header(ctx.cid, suite.uid, suite.title, ctx.preface))

    def on_test(self, test: TestPayload, state: TestState) -> None:
        results = self.state.worker(test.cid).results
        if state is TestState.PENDING:
            results.pending += 1
        elif state is TestState.PASS:
            results.passing += 1
        else:
            results.failing += 1
        if self.realtime:
            test.state = state
            suite = self.state.context.suite
            cid, uid = (suite.cid, suite.uid) if suite else (test.cid, None)
            self.sink.print(self.renderer.test_result(cid, uid, state.value, test.title, self.state.context.preface))

    def on_suite_end(self, suite: SuitePayload) -> None:
        self.state.worker(suite.cid)
        self.state.indents.suite_end(suite.cid)
        if self.realtime:
            self.state.context.suite = None

    def on_runner_end(self, runner: RunnerPayload) -> None:
        worker = self.state.worker(runner.cid)
        if not self.realtime:
            failures = [f for f in self.stats.failures() if f.cid == worker.cid]
            block = self.renderer.suite_result(worker, failures)
            if block.plain:
                self.sink.print(block)
            return
        # no suite started, so no header went out and there is nothing to close
        if not self.state.context.header_printed:
            return
        preface = self.state.context.preface
        self.sink.print(self.renderer.summary_footer(worker.results, self.stats.duration(worker.cid), preface))

    def on_end(self) -> None:
        spec_count = self.stats.runner_count()
        # a single worker already printed everything worth knowing
        if spec_count <= 1:
            return
        self.sink.print(self.renderer.suites_summary(spec_count))
        self.epilogue()

    # ---------- output ----------
    def print_header(self, runner: RunnerPayload) -> None:
        ctx = self.state.context
        ctx.cid = runner.cid
        ctx.preface = self.renderer.preface(runner.cid)
        ctx.header_printed = True
        self.sink.print(self.renderer.header(runner.cid, self.state.worker(runner.cid).specs))

    def print_totals(self) -> None:
        """Run-wide counts across all workers, longest worker as the duration."""
        totals = Results()
        for worker in self.state.workers.values():
            totals.passing += worker.results.passing
            totals.pending += worker.results.pending
            totals.failing += worker.results.failing
        duration = max((self.stats.duration(cid) for cid in self.state.workers), default=0)
        self.sink.print(self.renderer.summary(totals, duration))
