"""Selectable debug messages, switched on by single-character flags."""

from __future__ import annotations

import sys
from enum import Enum


class DebugFlag(str, Enum):
    """The predefined debug flags."""

    ALL = "+"
    THREAD = "t"
    SYNCH = "s"
    INT = "i"
    MACH = "m"
    DISK = "d"
    FILE = "f"
    ADDR = "a"
    NET = "n"
    SYS = "u"
    TRA_CODE = "c"


class Debug:
    """Decides which debug messages are printed.

    ``flags`` is a string of flag characters; ``+`` enables every flag.
    ``None`` enables none.
    """

    def __init__(self, flags: str | None) -> None:
        self.flags = flags

    def is_enabled(self, flag: DebugFlag | str) -> bool:
        """Return whether messages for ``flag`` are to be printed."""
        if self.flags is None:
            return False
        char = flag.value if isinstance(flag, DebugFlag) else flag
        return char in self.flags or DebugFlag.ALL.value in self.flags

    def log(self, flag: DebugFlag | str, message: object) -> None:
        """Write ``message`` to standard error when ``flag`` is enabled."""
        if self.is_enabled(flag):
            sys.stderr.write(f"{message}\n")