"""
Prefix stack for nested ``{ }`` blocks.
"""

from ..const import KEY_SEPARATOR


class PrefixResolver:
    """
    Tracks the active prefix segments and qualifies keys with them.

    Example:
        server
        {
            log
            {
                level = debug     -> "server.log.level"
            }
        }
    """

    def __init__(self) -> None:
        self._stack: list[str] = []

    def __len__(self) -> int:
        return len(self._stack)

    def __repr__(self) -> str:
        return f"PrefixResolver({self._stack!r})"

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(self._stack)

    def push(self, segment: str) -> None:
        self._stack.append(segment)

    def pop(self) -> str | None:
        """Leave the innermost block. Unmatched pops are ignored."""
        if not self._stack:
            return None
        return self._stack.pop()

    def qualify(self, bare_key: str) -> str:
        """Prepend the active prefix to a key."""
        if not self._stack:
            return bare_key
        return KEY_SEPARATOR.join(self._stack) + KEY_SEPARATOR + bare_key
