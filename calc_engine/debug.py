# debug.py
"""Checkpoint events emitted while an expression is normalized and solved.

A trace is any callable taking ``(stage, value)``.  Nothing the trace does is
fed back into the calculation.
"""
import logging

logger = logging.getLogger("calc_engine")


def log_checkpoint(stage, value=None):
    """Trace that writes every checkpoint to the package logger at DEBUG level."""
    if value is None:
        logger.debug("%s", stage)
    else:
        logger.debug("%s: %r", stage, value)


def combine(*traces):
    """Merge several traces into one; returns None when none are given."""
    active = [trace for trace in traces if trace is not None]
    if not active:
        return None
    if len(active) == 1:
        return active[0]

    def combined(stage, value=None):
        for trace in active:
            trace(stage, value)

    return combined


def checkpoint(trace, stage, value=None):
    if trace is not None:
        trace(stage, value)
