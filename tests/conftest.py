"""Shared fixtures: a run driver that feeds stats and reporter like an engine would."""

import io

import pytest
from rich.console import Console

from spec_reporter.config import ReporterConfig
from spec_reporter.events import (Event, EventKind, RunnerPayload, SuitePayload,
                                  TestPayload, EndPayload, ErrorInfo)
from spec_reporter.reporters.console import ConsoleSink
from spec_reporter.reporters.spec import SpecReporter
from spec_reporter.runners.stats import RunStats

CHROME = {"browserName": "chrome", "version": "100", "platform": "Windows"}


class RunDriver:
    """Plays the test engine: every event goes to the stats first, then the reporter."""

    def __init__(self, max_instances=1, color=False):
        self.buffer = io.StringIO()
        console = Console(file=self.buffer, width=200, color_system=None, highlight=False)
        self.stats = RunStats(clock=lambda: 0.0)
        self.config = ReporterConfig(max_instances=max_instances, color=color)
        self.reporter = SpecReporter(self.stats, self.config, ConsoleSink(console))

    @property
    def output(self):
        return self.buffer.getvalue()

    def send(self, kind, payload=None):
        event = Event(kind=kind, payload=payload if payload is not None else EndPayload())
        self.stats.handle(event)
        self.reporter.handle(event)

    def runner_start(self, cid, specs=("/specs/login.js",), caps=None, session_id="abc123", host=None):
        self.send(EventKind.RUNNER_START, RunnerPayload(
            cid=cid, specs=list(specs), capabilities=caps or CHROME,
            session_id=session_id, config={"host": host}))

    def suite_start(self, cid, uid, title=None, parent=None):
        self.send(EventKind.SUITE_START, SuitePayload(cid=cid, uid=uid, title=title or uid, parent=parent))

    def suite_end(self, cid, uid):
        self.send(EventKind.SUITE_END, SuitePayload(cid=cid, uid=uid, title=uid))

    def test(self, kind, cid, title, parent=None, message=None, stack=None):
        err = ErrorInfo(message=message or "", stack=stack) if kind is EventKind.TEST_FAIL else None
        self.send(kind, TestPayload(cid=cid, title=title, parent=parent, err=err))

    def passed(self, cid, title, parent=None):
        self.test(EventKind.TEST_PASS, cid, title, parent)

    def pending(self, cid, title, parent=None):
        self.test(EventKind.TEST_PENDING, cid, title, parent)

    def failed(self, cid, title, parent=None, message="boom", stack=None):
        self.test(EventKind.TEST_FAIL, cid, title, parent, message, stack)

    def runner_end(self, cid, duration=90000):
        self.send(EventKind.RUNNER_END, RunnerPayload(cid=cid, duration=duration))

    def end(self):
        self.send(EventKind.END)


@pytest.fixture
def realtime_run():
    return RunDriver(max_instances=1)


@pytest.fixture
def batch_run():
    return RunDriver(max_instances=4)
