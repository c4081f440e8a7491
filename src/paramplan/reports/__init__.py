"""Reporting module for plan run output."""

from paramplan.reports.base import Reporter
from paramplan.reports.console import ConsoleReporter
from paramplan.reports.jsonfile import JsonReporter
from paramplan.reports.registry import (
    clear_reporter_registry,
    get_reporter_registry,
    register_builtin,
    reporter,
    resolve_reporter,
    resolve_reporters,
)


register_builtin(ConsoleReporter)
register_builtin(JsonReporter)

__all__ = [
    "ConsoleReporter",
    "JsonReporter",
    "Reporter",
    "clear_reporter_registry",
    "get_reporter_registry",
    "reporter",
    "resolve_reporter",
    "resolve_reporters",
]
