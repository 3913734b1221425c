"""Board directory port.

Identity and user management live outside the review core. This port
exposes the two facts the review workflow needs from them: who is an
active board member right now, and where to email a user.
"""

from __future__ import annotations

from typing import Protocol


class BoardDirectoryProtocol(Protocol):
    """Read-only view of the user directory."""

    async def list_active_board_member_ids(self) -> list[str]:
        """List the ids of currently active board members."""
        ...

    async def get_email(self, user_id: str) -> str | None:
        """Return a user's email address, or None if unknown."""
        ...
