#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#
"""
Logging for the binding.

Loggers are created lazily per tag and share one handler style. Message
bodies are only rendered at LOG_PROTOCOL_TRACE so that normal debug output
stays readable.
"""
import logging

import colorlog
from wrapt import synchronized


# Trace log levels
LOG_TRACE = 5
LOG_PROTOCOL_TRACE = 4

logging.addLevelName(LOG_TRACE, "TRACE")
logging.addLevelName(LOG_PROTOCOL_TRACE, "PROTOCOL")

PLAIN_FORMAT = " %(name)s/%(levelname)-8s | %(message)s"
COLOR_FORMAT = (" %(log_color)s%(name)s/%(levelname)-8s%(reset)s |"
                " %(log_color)s%(message)s%(reset)s")


class Log(object):
    """
    Logger registry

    Call get() to get a cached instance of a specific logger.
    Colored output and the level can be changed at any time with
    configure(); loggers that already exist are updated in place.
    """

    _LOGGERS = {}
    _HANDLERS = {}
    _use_color = False
    _level = None


    @classmethod
    def _make_handler(cls):
        if cls._use_color:
            handler = colorlog.StreamHandler()
            handler.setFormatter(colorlog.ColoredFormatter(COLOR_FORMAT))
        else:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
        return handler


    @synchronized
    @classmethod
    def get(cls, tag: str) -> logging.Logger:
        """
        Get the global logger instance for the given tag

        :param tag: the log tag, e.g. "colormgr.connection"
        :return: the logger instance
        """
        if tag not in cls._LOGGERS:
            handler = cls._make_handler()
            logger = logging.getLogger(tag)
            logger.addHandler(handler)
            if cls._level is not None:
                logger.setLevel(cls._level)

            cls._HANDLERS[tag] = handler
            cls._LOGGERS[tag] = logger

        return cls._LOGGERS[tag]


    @synchronized
    @classmethod
    def configure(cls, level=None, color: bool=None):
        """
        Apply a log level and/or color setting to all loggers

        :param level: a logging level, by number or name
        :param color: True to use colorlog formatting
        """
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
            if not isinstance(level, int):
                raise ValueError("Unknown log level: %s" % level)

        if level is not None:
            cls._level = level
        if color is not None:
            cls._use_color = color

        for tag, logger in cls._LOGGERS.items():
            if color is not None:
                logger.removeHandler(cls._HANDLERS[tag])
                cls._HANDLERS[tag] = cls._make_handler()
                logger.addHandler(cls._HANDLERS[tag])
            if cls._level is not None:
                logger.setLevel(cls._level)


    @classmethod
    def enable_color(cls, enable: bool):
        """
        Enable colored output for all loggers
        """
        cls.configure(color=enable)
