# Lightweight package init: avoid eager imports that can fail at console start.
__all__ = ["SpecReporter", "RunStats"]

def __getattr__(name):
    if name == "SpecReporter":
        from .reporters.spec import SpecReporter as _SpecReporter
        return _SpecReporter
    if name == "RunStats":
        from .runners.stats import RunStats as _RunStats
        return _RunStats
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
