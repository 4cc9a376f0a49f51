from typing import Iterable, List, Protocol
import json, logging, pathlib
import yaml

from ..events import Event, parse_event

log = logging.getLogger(__name__)

class EventHandler(Protocol):
    def handle(self, event: Event) -> None: ...

def load_events(path: str) -> List[Event]:
    """
    Read an event log: JSON lines ({"event": "suite:start", "cid": ...} per
    line) or, for .yaml/.yml files, a YAML list of the same records.
    """
    p = pathlib.Path(path)
    text = p.read_text()
    if p.suffix in (".yaml", ".yml"):
        records = yaml.safe_load(text) or []
    else:
        records = [json.loads(line) for line in text.splitlines() if line.strip()]
    return [parse_event(r) for r in records]

def replay(events: Iterable[Event], *handlers: EventHandler) -> int:
    """Deliver each event to every handler in turn (stats first, then reporters)."""
    count = 0
    for event in events:
        for h in handlers:
            h.handle(event)
        count += 1
    log.debug("replayed %d events", count)
    return count
