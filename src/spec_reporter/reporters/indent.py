from typing import Dict

INDENT_UNIT = "    "

class IndentTracker:
    """
    Per-worker suite nesting. Each worker keeps one running depth that
    suite:start bumps and suite:end lowers, whichever suite ended; the
    depth a suite got at start is stored and never recomputed, so siblings
    at the same level end up with the same value.
    """

    def __init__(self):
        self._depth: Dict[str, int] = {}
        self._suites: Dict[str, Dict[str, int]] = {}

    def start_worker(self, cid: str) -> None:
        self._depth[cid] = 0
        self._suites[cid] = {}

    def suite_start(self, cid: str, uid: str) -> int:
        assert cid in self._depth, f"unknown worker {cid!r}"
        self._depth[cid] += 1
        self._suites[cid][uid] = self._depth[cid]
        return self._depth[cid]

    def suite_end(self, cid: str) -> None:
        assert cid in self._depth, f"unknown worker {cid!r}"
        self._depth[cid] -= 1

    def current(self, cid: str) -> int:
        return self._depth[cid]

    def depth(self, cid: str, uid: str) -> int:
        suites = self._suites.get(cid, {})
        assert uid in suites, f"unknown suite {uid!r} for worker {cid!r}"
        return suites.get(uid, 0)

    def indent(self, cid: str, uid: str) -> str:
        return INDENT_UNIT * max(self.depth(cid, uid) - 1, 0)
