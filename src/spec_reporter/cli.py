from typing import Optional
import json
import typer
from pydantic import ValidationError
from .config import load_config, ReporterConfig
from .logging import setup_logging
from .runners.replay import load_events, replay
from .runners.stats import RunStats
from .reporters.spec import SpecReporter
from .utils.capabilities import describe as describe_caps

app = typer.Typer(add_completion=False, help="Spec reporter - render multi-worker test runs as a spec tree")

@app.command("replay")
def replay_log(
    events: str = typer.Argument(..., help="Event log, JSON lines or YAML list"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to reporter config YAML"),
    max_instances: Optional[int] = typer.Option(None, "--max-instances", "-m", help="Override max_instances; 1 streams output"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colour"),
):
    """Render the report for a recorded event log."""
    try:
        cfg: ReporterConfig = load_config(config)
        updates = {}
        if max_instances is not None: updates["max_instances"] = max_instances
        if no_color: updates["color"] = False
        cfg = ReporterConfig.model_validate({**cfg.model_dump(), **updates})
        log = setup_logging(cfg.log_level)
        recorded = load_events(events)
    except (ValidationError, ValueError, KeyError, OSError) as e:
        typer.echo(f"Invalid input: {e}", err=True)
        raise typer.Exit(code=2)

    stats = RunStats()
    reporter = SpecReporter(stats, cfg)
    n = replay(recorded, stats, reporter)
    log.debug("%d events from %s", n, events)
    raise typer.Exit(code=1 if stats.failures() else 0)

@app.command()
def describe(
    capabilities: str = typer.Argument(..., help='Capabilities as JSON, e.g. {"browserName": "chrome"}'),
    compact: bool = typer.Option(False, "--compact", help="Print the short form used in line prefixes"),
):
    """Print the environment descriptor for a capability record."""
    typer.echo(describe_caps(json.loads(capabilities), verbose=not compact))
