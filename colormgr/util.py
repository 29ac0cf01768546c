#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#
"""
Various helper functions that are used across the library.
"""
import asyncio
import re


def camel_to_snake(name: str) -> str:
    """
    Returns a snake_case_name from a CamelCaseName
    """
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def ensure_future(coro, loop=None):
    """
    Wrapper for asyncio.ensure_future which reports exceptions
    to the loop's exception handler instead of dropping them
    """
    if loop is None:
        loop = asyncio.get_running_loop()
    fut = asyncio.ensure_future(coro, loop=loop)
    def exception_logging_done_cb(fut):
        if fut.cancelled():
            return
        e = fut.exception()
        if e is not None:
            loop.call_exception_handler({
                "message": "Unhandled exception in async future",
                "future": fut,
                "exception": e,
            })
    fut.add_done_callback(exception_logging_done_cb)
    return fut
