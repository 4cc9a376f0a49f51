from typing import Optional
from rich.console import Console
from rich.text import Text

class ConsoleSink:
    """Line-oriented output; one print per rendered block, like console.log."""
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)
    def print(self, block: Text) -> None:
        self.console.print(block, soft_wrap=True, highlight=False)
