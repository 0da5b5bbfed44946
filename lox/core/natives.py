"""Native functions installed into the global scope before any user statement runs."""

import time

from lox.core.callable import NativeFunction


def clock_native(clock=None):
    """clock(): fractional seconds since the host clock's epoch. clock defaults to time.time."""
    if clock is None:
        clock = time.time
    return NativeFunction("clock", 0, lambda: float(clock()))


def install(env, clock=None):
    """Defines every native function in env (the global environment)."""
    for native in (clock_native(clock),):
        env.define(native.name, native)
