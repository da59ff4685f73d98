"""Errors raised by the table core.

Every error is a synchronous rule violation or caller misuse; none is worth
retrying. Each class also derives from the builtin that describes the
failure so callers that only catch ``ValueError``/``RuntimeError`` keep
working.
"""

from __future__ import annotations


class TableError(Exception):
    """Base class for table errors."""


class OutOfTurnError(TableError, RuntimeError):
    """Action invoked by a player other than the current actor."""


class IllegalActionError(TableError, ValueError):
    """Action is not in the actor's legal action set."""


class InvalidAmountError(TableError, ValueError):
    """Amount missing or not a whole number of chips."""


class BelowMinimumError(TableError, ValueError):
    """Bet or raise below the minimum while not all-in."""


class ExceedsStackError(TableError, ValueError):
    """Amount larger than the player's stack."""


class SeatUnavailableError(TableError, RuntimeError):
    """Table is full or the requested seat cannot be taken."""


class DuplicatePlayerError(TableError, ValueError):
    """Player id is already seated."""


class InsufficientPlayersError(TableError, RuntimeError):
    """Not enough players for the requested operation."""


class ActiveHandError(TableError, RuntimeError):
    """Operation does not fit the current hand state."""


class PlayerNotFoundError(TableError, LookupError):
    """No seated player matches."""


class InvalidConfigError(TableError, ValueError):
    """Table configuration is inconsistent."""
