"""Command parser for decoded protocol lines."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Command:
    """One request line split into verb and argument."""

    verb: str
    argument: str = ""

    def has_argument(self) -> bool:
        """Check if any argument text was given."""
        return bool(self.argument)


class CommandParser:
    """Parses decoded lines into Command objects."""

    ENCODING = "utf-8"

    def parse(self, line: bytes | str) -> Command:
        """
        Parse one decoded line into a Command.

        Never fails: empty or unrecognized input still produces a Command,
        and judging it is left to the state machine.

        Args:
            line: The line with its terminator already stripped.

        Returns:
            Command with an uppercase verb and the remaining text.
        """
        if isinstance(line, bytes):
            line = line.decode(self.ENCODING, errors="replace")

        cleaned = line.strip()
        if not cleaned:
            return Command(verb="", argument="")

        parts = cleaned.split(None, 1)
        verb = parts[0].upper()
        argument = parts[1].strip() if len(parts) > 1 else ""
        return Command(verb=verb, argument=argument)
