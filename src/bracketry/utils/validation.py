"""Validation utilities for Bracketry.

This module provides reusable validation functions with consistent error
handling. Each ``validate_*`` function returns a :class:`ValidationResult`;
the ``*_strict`` variants raise the matching InvalidInput exception instead.
"""

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

import math
from numbers import Real
from typing import Any, Iterable, Optional

from bracketry.constants import ALL_FORMATS, SEEDING_MODES, SWISS_ROUNDS_AUTO
from bracketry.exceptions import (
    InvalidConfigurationException,
    InvalidParticipantsException,
    InvalidResultException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


def _invalid(message: str) -> ValidationResult:
    return ValidationResult(is_valid=False, error_message=message)


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


# ========== Format / Configuration Validation ==========


def validate_format(tournament_format: Optional[str]) -> ValidationResult:
    """Validate a tournament format name."""
    if tournament_format not in ALL_FORMATS:
        return _invalid(
            f"Unknown tournament format: {tournament_format!r} "
            f"(expected one of {', '.join(ALL_FORMATS)})"
        )
    return ValidationResult(is_valid=True, sanitized_value=tournament_format)


def validate_config(config) -> ValidationResult:
    """Validate a :class:`TournamentConfig`.

    Args:
        config: Configuration to check

    Returns:
        ValidationResult carrying the config itself when valid
    """
    if config.seeding not in SEEDING_MODES:
        return _invalid(f"Unknown seeding mode: {config.seeding!r}")

    for name in ("group_count", "qualifiers_per_group"):
        value = getattr(config, name)
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            return _invalid(f"{name} must be a positive integer, got {value!r}")

    for name in ("points_win", "points_draw", "points_loss"):
        if not _is_number(getattr(config, name)):
            return _invalid(f"{name} must be a number, got {getattr(config, name)!r}")

    for name in ("best_of", "best_of_final"):
        value = getattr(config, name)
        if value is None and name == "best_of_final":
            continue
        if not isinstance(value, int) or isinstance(value, bool):
            return _invalid(f"{name} must be an odd positive integer, got {value!r}")
        if value < 1 or value % 2 == 0:
            return _invalid(f"{name} must be an odd positive integer, got {value!r}")

    rounds = config.swiss_rounds
    if rounds != SWISS_ROUNDS_AUTO:
        if not isinstance(rounds, int) or isinstance(rounds, bool) or rounds < 1:
            return _invalid(
                f"swiss_rounds must be a positive integer or 'auto', got {rounds!r}"
            )

    return ValidationResult(is_valid=True, sanitized_value=config)


def validate_config_strict(config) -> None:
    """Validate configuration and raise exception if invalid.

    Raises:
        InvalidConfigurationException: If any setting is malformed
    """
    result = validate_config(config)
    if not result.is_valid:
        raise InvalidConfigurationException(result.error_message)


# ========== Participant Validation ==========


def validate_participants(participants: Iterable, minimum: int = 2) -> ValidationResult:
    """Validate a participant list for bracket generation.

    Checks the field size, that ids are unique and that explicit seeds are
    unique positive integers.
    """
    participants = list(participants)
    if len(participants) < minimum:
        return _invalid(
            f"At least {minimum} participants are required, got {len(participants)}"
        )

    ids = [p.id for p in participants]
    if len(set(ids)) != len(ids):
        return _invalid("Participant ids must be unique")

    seeds = [p.seed for p in participants if p.seed is not None]
    for seed in seeds:
        if not isinstance(seed, int) or isinstance(seed, bool) or seed < 1:
            return _invalid(f"Seeds must be positive integers, got {seed!r}")
    if len(set(seeds)) != len(seeds):
        return _invalid("Seeds must be unique among seeded participants")

    return ValidationResult(is_valid=True, sanitized_value=participants)


def validate_participants_strict(participants: Iterable, minimum: int = 2) -> None:
    """Raises InvalidParticipantsException if the list cannot be paired."""
    result = validate_participants(participants, minimum)
    if not result.is_valid:
        raise InvalidParticipantsException(result.error_message)


def validate_participant_name(name: Optional[str]) -> ValidationResult:
    if not name or not name.strip():
        return _invalid("Participant name is required")
    return ValidationResult(is_valid=True, sanitized_value=name.strip())


# ========== Result Validation ==========


def validate_score(score: Any) -> ValidationResult:
    """Scores must be finite, non-negative numbers."""
    if not _is_number(score):
        return _invalid(f"Score must be a number, got {score!r}")
    if score < 0:
        return _invalid(f"Score cannot be negative, got {score!r}")
    return ValidationResult(is_valid=True, sanitized_value=score)


def validate_scores_strict(*scores: Any) -> None:
    """Raises InvalidResultException on the first malformed score."""
    for score in scores:
        result = validate_score(score)
        if not result.is_valid:
            raise InvalidResultException(result.error_message)
