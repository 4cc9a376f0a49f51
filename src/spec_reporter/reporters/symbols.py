from typing import Optional, Dict, Union
from rich.text import Text
from ..config import DEFAULT_THEME

STATE_COLORS = {
    "pass": "green", "passing": "green",
    "pending": "pending",
    "fail": "fail", "failing": "fail",
}

def color_for(state: str) -> Optional[str]:
    return STATE_COLORS.get(state)

class Symbols:
    def __init__(self, ok: str = "✓"):
        self.ok = ok
        self.error_count = 0

    def symbol_for(self, state: str) -> str:
        """
        Glyph for a test state. Every "fail" lookup advances the error
        counter and returns the next number ("1)", "2)", ...), so call it
        exactly once per printed failure.
        """
        if state == "pass":
            return self.ok
        if state == "pending":
            return "-"
        if state == "fail":
            self.error_count += 1
            return f"{self.error_count})"
        return "?"

    def reset(self) -> None:
        self.error_count = 0

class Theme:
    """Maps colour categories to rich styles."""

    def __init__(self, styles: Optional[Dict[str, str]] = None, enabled: bool = True):
        self.styles = dict(DEFAULT_THEME if styles is None else styles)
        self.enabled = enabled

    def color(self, category: Optional[str], text: Union[str, int]) -> Text:
        style = self.styles.get(category, "") if (category and self.enabled) else ""
        return Text(str(text), style=style)
