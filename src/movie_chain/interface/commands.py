# ABOUTME: Command parsing for the terminal front end of the movie chain game.
# ABOUTME: Turns slash commands typed by the player into structured ParsedCommand values.

import re
from dataclasses import dataclass, field
from enum import Enum


class InvalidCommandError(Exception):
    """Raised when a command cannot be parsed"""
    pass


class CommandType(str, Enum):
    """Commands the player can type"""
    START = "start"
    PICK = "pick"
    SUBMIT = "submit"
    RESET = "reset"
    NEW = "new"
    SHARE = "share"
    HELP = "help"
    QUIT = "quit"


PICK_TARGETS = ("actor", "film", "start", "target")


@dataclass
class ParsedCommand:
    """Parsed command with type and arguments"""
    command_type: CommandType
    args: dict = field(default_factory=dict)
    raw_input: str = ""


class CommandParser:
    """
    Parser for player commands.

    Supports:
    - "/start 7 9" start a game between two performer ids
    - "/start" start a game from the picked start and target performers
    - "/pick actor 2", "/pick film 1", "/pick start 3", "/pick target 1"
    - "/submit", "/reset", "/new", "/share", "/help", "/quit"
    """

    COMMAND_PATTERNS = {
        CommandType.START: r'^/start(?:\s+(\S+)\s+(\S+))?$',
        CommandType.PICK: r'^/pick(?:\s+(\S+)(?:\s+(\S+))?)?$',
        CommandType.SUBMIT: r'^/submit$',
        CommandType.RESET: r'^/reset$',
        CommandType.NEW: r'^/new$',
        CommandType.SHARE: r'^/share$',
        CommandType.HELP: r'^/(?:help|\?)$',
        CommandType.QUIT: r'^/(?:quit|exit)$',
    }

    def parse(self, user_input: str) -> ParsedCommand:
        """
        Parse user input into structured command.

        Raises:
            InvalidCommandError: If command cannot be parsed
        """
        if not user_input or not user_input.strip():
            raise InvalidCommandError("Cannot parse empty command")

        user_input = user_input.strip()

        for cmd_type, pattern in self.COMMAND_PATTERNS.items():
            match = re.match(pattern, user_input, re.IGNORECASE)
            if match:
                return self._parse_matched_command(cmd_type, match, user_input)

        raise InvalidCommandError(f"Unknown command: {user_input} (try /help)")

    def _parse_matched_command(
        self,
        cmd_type: CommandType,
        match: re.Match,
        raw_input: str
    ) -> ParsedCommand:
        if cmd_type == CommandType.START:
            if match.group(1) is None:
                return ParsedCommand(command_type=cmd_type, args={}, raw_input=raw_input)
            return ParsedCommand(
                command_type=cmd_type,
                args={
                    "start_id": _parse_id(match.group(1), "start performer id"),
                    "target_id": _parse_id(match.group(2), "target performer id"),
                },
                raw_input=raw_input
            )

        if cmd_type == CommandType.PICK:
            target, number = match.group(1), match.group(2)
            if target is None or number is None:
                raise InvalidCommandError("Usage: /pick <actor|film|start|target> <number>")
            target = target.lower()
            if target not in PICK_TARGETS:
                raise InvalidCommandError(
                    f"Cannot pick '{target}'. Choose one of: {', '.join(PICK_TARGETS)}"
                )
            index = _parse_id(number, "result number")
            if index < 1:
                raise InvalidCommandError("Result numbers start at 1")
            return ParsedCommand(
                command_type=cmd_type,
                args={"target": target, "index": index},
                raw_input=raw_input
            )

        # Commands without arguments
        return ParsedCommand(command_type=cmd_type, args={}, raw_input=raw_input)


def _parse_id(value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise InvalidCommandError(f"Invalid {what}: '{value}' is not a number")
