import logging
from rich.console import Console
from rich.logging import RichHandler
def setup_logging(level: str = "INFO"):
    # stderr keeps log records out of the report written to stdout
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True)
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler])
    return logging.getLogger("spec_reporter")
