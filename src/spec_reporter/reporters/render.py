from __future__ import annotations
from typing import Dict, List, Optional
from rich.text import Text

from ..events import TestState
from ..runners.stats import StatsSource, SuiteStats, FailureStats
from ..utils.capabilities import describe
from ..utils.duration import format_duration
from .indent import IndentTracker
from .state import Results, WorkerState
from .symbols import Symbols, Theme, color_for

RULE = "-" * 66
BANNER = "=" * 66
BEFORE_ALL = '"before all"'
SAUCE_HOST = "saucelabs.com"
SAUCE_JOB_URL = "https://saucelabs.com/tests/{session_id}"

class Renderer:
    """
    Text blocks of the spec report. Nothing here prints; the only state
    touched is the failure counter behind Symbols.symbol_for("fail").
    """

    def __init__(self, stats: StatsSource, theme: Theme, symbols: Symbols, indents: IndentTracker):
        self.stats = stats
        self.theme = theme
        self.symbols = symbols
        self.indents = indents

    def preface(self, cid: str) -> str:
        return f"[{describe(self.stats.capabilities(cid), verbose=False)} #{cid}]"

    def indent(self, cid: str, uid: Optional[str]) -> str:
        return self.indents.indent(cid, uid) if uid is not None else ""

    # ---------- worker header ----------
    def header(self, cid: str, specs: List[str]) -> Text:
        p = self.preface(cid)
        lines = [
            RULE,
            f"{p} Session ID: {self.stats.session_id(cid) or ''}",
            f"{p} Spec: {','.join(specs)}",
            f"{p} Running: {describe(self.stats.capabilities(cid))}",
        ]
        return Text("\n".join(lines))

    def suite_header(self, cid: str, uid: str, title: str, preface: str) -> Text:
        return Text(f"{preface} \n{preface} {self.indent(cid, uid)}{title}")

    def test_result(self, cid: str, uid: Optional[str], state: str, title: str, preface: str) -> Text:
        glyph = self.theme.color(color_for(state), self.symbols.symbol_for(state))
        return Text.assemble(preface, "   ", self.indent(cid, uid), glyph, " ", title)

    # ---------- batched tree ----------
    def result_list(self, cid: str, suites: Dict[str, SuiteStats], preface: str = "") -> Text:
        out = Text()
        for uid, suite in suites.items():
            # setup-only suites are not part of the listing
            if uid.startswith(BEFORE_ALL):
                continue
            out.append(f"{preface} {self.indent(cid, uid)}{suite.title}\n")
            for test in suite.tests.values():
                if TestState(test.state) is TestState.UNSET:
                    continue
                out.append(self.test_result(cid, uid, TestState(test.state).value, test.title, preface))
                out.append("\n")
            out.append(preface.strip() + "\n")
        return out

    # ---------- summary ----------
    def summary(self, results: Results, duration: float, preface: str = "") -> Text:
        """
        One line per non-zero state in passing/pending/failing order. The
        duration is only appended to the first line that gets printed.
        """
        out = Text()
        displayed_duration = False
        for state, count in results.items():
            if count == 0:
                continue
            suffix = "" if displayed_duration else f" ({format_duration(duration)})"
            color = color_for(state)
            out.append(preface + " ")
            out.append(self.theme.color(color, count))
            out.append(" ")
            out.append(self.theme.color(color, state))
            out.append(suffix + "\n")
            displayed_duration = True
        return out

    def summary_footer(self, results: Results, duration: float, preface: str) -> Text:
        out = Text(f"{preface}\n{preface}\n")
        out.append(self.summary(results, duration, preface))
        out.append(f"{preface}\n")
        return out

    def failure_list(self, failures: List[FailureStats], preface: str) -> Text:
        out = Text()
        for i, test in enumerate(failures, 1):
            title = f"{test.parent} {test.title}" if test.parent is not None else test.title
            out.append(f"{preface.strip()}\n")
            out.append(Text.assemble(preface, " ", self.theme.color("error title", f"{i}) {title}:"), "\n"))
            out.append(Text.assemble(preface, " ", self.theme.color("error message", test.err.message), "\n"))
            if test.err.stack:
                for line in test.err.stack.split("\n"):
                    out.append(Text.assemble(preface, " ", self.theme.color("error stack", line), "\n"))
            else:
                out.append(Text.assemble(preface, " ", self.theme.color("error stack", "no stack available"), "\n"))
        return out

    def job_link(self, cid: str, preface: str) -> Text:
        host = self.stats.host(cid)
        if not host or SAUCE_HOST not in host:
            return Text()
        url = SAUCE_JOB_URL.format(session_id=self.stats.session_id(cid))
        return Text(f"{preface.strip()}\n{preface} Check out job at {url}\n")

    def suite_result(self, worker: WorkerState, failures: List[FailureStats]) -> Text:
        """Whole batched block for one worker; empty when it ran no suites."""
        cid = worker.cid
        suites = self.stats.suites(cid)
        if not suites:
            return Text()

        self.symbols.reset()
        p = self.preface(cid)
        out = self.header(cid, worker.specs)
        out.append(f"\n{p}\n")
        out.append(self.result_list(cid, suites, p))
        out.append(f"{p}\n")
        out.append(self.summary(worker.results, self.stats.duration(cid), p))
        out.append(self.failure_list(failures, p))
        out.append(self.job_link(cid, p))
        out.append(f"{p}\n")
        return out

    def suites_summary(self, spec_count: int) -> Text:
        return Text(f"\n\n{BANNER}\nNumber of specs: {spec_count}")
