"""Timestamp utilities."""

import time


def get_nonce() -> float:
    """
    Get the nonce for a private request.

    The nonce is the wall-clock time in seconds with its fractional part.
    Nothing is persisted between calls, so requests sharing one credential
    must be dispatched one after another for the exchange to see strictly
    increasing values. Bursts faster than the clock resolution, or a clock
    stepping backwards, can repeat or lower the value.
    """
    return time.time()
