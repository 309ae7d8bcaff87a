"""Prompts for the navigation session.

Uses questionary for password/text input and arrow-key select menus.
"""

from typing import Protocol

import questionary
from questionary import Choice


class Prompter(Protocol):
    async def ask_token(self) -> str: ...

    async def ask_base_url(self, default: str) -> str: ...

    async def select(self, message: str, choices: list[tuple[str, str]]) -> str: ...


def _answered(value: str | None) -> str:
    if value is None:
        # questionary returns None when the user cancels (Ctrl+C)
        raise KeyboardInterrupt("Cancelled by user")
    return value


class QuestionaryPrompter:
    """Interactive prompts backed by questionary."""

    async def ask_token(self) -> str:
        """Hidden token entry."""
        value = await questionary.password("Token:").ask_async()
        return _answered(value)

    async def ask_base_url(self, default: str) -> str:
        """Base URL entry, pre-filled with the default.

        Enter saves and tests the connection.
        """
        value = await questionary.text("Base URL:", default=default).ask_async()
        return _answered(value)

    async def select(self, message: str, choices: list[tuple[str, str]]) -> str:
        """Arrow-key menu.

        Args:
            message: Prompt shown above the menu
            choices: (label, value) pairs

        Returns:
            The selected value

        Raises:
            KeyboardInterrupt: If user cancels (Ctrl+C)
        """
        selected = await questionary.select(
            f"{message} (↑↓ navigate, Enter confirm):",
            choices=[Choice(title=label, value=value) for label, value in choices],
        ).ask_async()
        return _answered(selected)
