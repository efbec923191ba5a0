"""DexBot package providing the daily species roll, its ledger, and Discord wiring."""

from . import catalog, checkpoint, cog, errors, handler, ledger, models, override, rendering, triggers, utils  # noqa: F401

__all__ = [
    "catalog",
    "checkpoint",
    "cog",
    "errors",
    "handler",
    "ledger",
    "models",
    "override",
    "rendering",
    "triggers",
    "utils",
]
