"""
Error taxonomy for the game core.

Every error is raised before any state is touched, so a failed call leaves
the session exactly as it was. Callers turn these into user-facing messages.
"""


class PokedleError(Exception):
    """Base class for every error raised by pokedle."""


class InvalidInput(PokedleError, ValueError):
    """Malformed guess or scorer arguments (empty, wrong length, non-letters)."""


class SessionTerminal(PokedleError):
    """A guess was submitted against a session that is already Won or Lost."""


class DuplicateEntry(PokedleError):
    """A store already holds a record for this unique key."""


class UnknownName(InvalidInput):
    """The guess is well-formed but is not a known Pokémon name."""
