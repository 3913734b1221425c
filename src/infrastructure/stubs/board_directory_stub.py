"""Board directory stub implementation."""

from __future__ import annotations

from src.application.ports.board_directory import BoardDirectoryProtocol


class BoardDirectoryStub(BoardDirectoryProtocol):
    """In-memory user directory for development and testing.

    Example:
        >>> directory = BoardDirectoryStub(["board-1", "board-2"])
        >>> directory.set_email("applicant-1", "applicant@example.org")
    """

    def __init__(
        self,
        active_board_member_ids: list[str] | None = None,
        emails: dict[str, str] | None = None,
    ) -> None:
        self._board_member_ids: list[str] = list(active_board_member_ids or [])
        self._emails: dict[str, str] = dict(emails or {})

    async def list_active_board_member_ids(self) -> list[str]:
        return list(self._board_member_ids)

    async def get_email(self, user_id: str) -> str | None:
        return self._emails.get(user_id)

    # Test helper methods

    def add_board_member(self, user_id: str, email: str | None = None) -> None:
        if user_id not in self._board_member_ids:
            self._board_member_ids.append(user_id)
        if email:
            self._emails[user_id] = email

    def deactivate_board_member(self, user_id: str) -> None:
        if user_id in self._board_member_ids:
            self._board_member_ids.remove(user_id)

    def set_email(self, user_id: str, email: str) -> None:
        self._emails[user_id] = email
