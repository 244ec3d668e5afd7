from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import NoActiveTerminal


@dataclass(frozen=True)
class ActiveTerminal:
    host_name: str
    session_name: str


class ActiveTerminalContext:
    """Default (host, session) pair used by the shorthand send/read tools.

    Empty until set. There is no clear operation; the pointer lives as long as
    the process. It is not re-validated on use, a session closed since it was
    set surfaces as SessionNotFound on the next call.

    Not synchronized: concurrent set/send/read calls see whichever write
    happened last.
    """

    def __init__(self):
        self._active: Optional[ActiveTerminal] = None

    def set(self, host_name: str, session_name: str) -> ActiveTerminal:
        self._active = ActiveTerminal(host_name=host_name, session_name=session_name)
        return self._active

    def get(self) -> Optional[ActiveTerminal]:
        return self._active

    def require(self) -> ActiveTerminal:
        if self._active is None:
            raise NoActiveTerminal()
        return self._active
