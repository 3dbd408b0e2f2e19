# faktory_cli/background/__init__.py
"""
Signal-driven lifecycle control.

Exports:
    - LifecycleController: Single-listener signal dispatcher
    - LifecycleState: RUNNING / RELOADING / TERMINATING
    - default_signal_table: SIGTERM/SIGINT -> shutdown, SIGHUP -> reload
"""

from faktory_cli.background.lifecycle import LifecycleController, LifecycleState
from faktory_cli.background.signals import default_signal_table, reload, shutdown

__all__ = [
    "LifecycleController",
    "LifecycleState",
    "default_signal_table",
    "reload",
    "shutdown",
]
