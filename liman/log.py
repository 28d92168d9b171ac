"""Tagged log messages written to the console or a file."""

from __future__ import annotations

import sys
from enum import Enum, auto


class LogFlag(Enum):
    NULL_AIM = auto()
    FILE = auto()
    CONSOLE = auto()


class LogManager:
    """Writes tagged messages to the configured target."""

    def __init__(self) -> None:
        self.flag = LogFlag.NULL_AIM
        self.log_file = ""

    def init(self, log_file_name: str) -> None:
        """Log to the console for an empty name, otherwise to that file."""
        self.log_file = log_file_name
        self.flag = LogFlag.CONSOLE if not log_file_name else LogFlag.FILE

    def set_flag(self, flag: LogFlag) -> None:
        self.flag = flag

    def write_log(self, tag: str, message: str) -> None:
        if self.flag is LogFlag.FILE:
            with open(self.log_file, "a", encoding="utf-8") as handle:
                handle.write(f"{tag}: {message}\n")
        elif self.flag is LogFlag.CONSOLE:
            print(f"{tag}: {message}", file=sys.stderr)
        else:
            print("Logger: aim not defined", file=sys.stderr)


_manager = LogManager()


def init(log_file_name: str) -> None:
    """Create the shared log manager with the given target."""
    global _manager
    _manager = LogManager()
    _manager.init(log_file_name)


def write_log(tag: str, message: str) -> None:
    """Write a message through the shared log manager."""
    _manager.write_log(tag, message)


def destroy() -> None:
    """Drop the shared log manager; later messages have no target."""
    global _manager
    _manager = LogManager()