"""Exceptions for use in Bracketry"""

# Bracketry
# Copyright (C) 2025  Bracketry developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


# ========== Base Application Exception ==========


class BracketryException(Exception):
    """Base exception for all Bracketry errors.

    All custom exceptions in the engine inherit from this class, so callers can
    catch every engine-specific error with a single except clause.
    """

    pass


# ========== Invalid Input ==========


class InvalidInputException(BracketryException):
    """Raised when a request is malformed.

    Invalid input is always detected before the tournament is touched, so
    nothing is partially applied when this is raised.
    """

    pass


class InvalidConfigurationException(InvalidInputException):
    """Raised when configuration data is invalid."""

    pass


class InvalidParticipantsException(InvalidInputException):
    """Raised when the participant list cannot produce a bracket."""

    pass


class MatchNotFoundException(InvalidInputException):
    """Raised when a requested match does not exist."""

    pass


class ParticipantNotFoundException(InvalidInputException):
    """Raised when a requested participant does not exist."""

    pass


class PenaltyNotFoundException(InvalidInputException):
    """Raised when a requested penalty does not exist."""

    pass


class InvalidResultException(InvalidInputException):
    """Raised when a submitted result is invalid (e.g. unknown winner)."""

    pass


# ========== Illegal Transitions ==========


class IllegalTransitionException(BracketryException):
    """Raised when the tournament is in the wrong state for an operation.

    The engine facade turns these into a no-op plus a diagnostic message.
    """

    pass


class RoundIncompleteException(IllegalTransitionException):
    """Raised when a new round is requested before the current one is done."""

    pass


class UnsupportedFormatOperationException(IllegalTransitionException):
    """Raised when an operation has no meaning for the tournament format."""

    pass


# ========== Persistence ==========


class PersistenceException(BracketryException):
    """Base exception for snapshot storage errors."""

    pass


class SnapshotLoadException(PersistenceException):
    """Raised when a stored snapshot cannot be read back."""

    pass
