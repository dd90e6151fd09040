"""Shared helpers: logger setup, ids and timestamps."""

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

import logging
import os
import uuid
from datetime import datetime, timezone
from typing import Optional, Union

from dateutil.parser import isoparse

from bracketry.constants import LOG_LEVEL_ENV_VAR, LOGGER_ROOT

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Return a logger that reports through the package root handler.

    The root ``bracketry`` logger gets a single stream handler the first time
    this is called. Its level comes from ``level``, the ``BRACKETRY_LOG_LEVEL``
    environment variable, or WARNING.

    Args:
        name: Logger name, usually ``__name__``
        level: Optional level override for the package root logger

    Returns:
        The configured logger
    """
    root = logging.getLogger(LOGGER_ROOT)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper())
    if level is not None:
        root.setLevel(level.upper() if isinstance(level, str) else level)
    return logging.getLogger(name)


def generate_id(prefix: str = "") -> str:
    """Generate a unique identifier, optionally prefixed (``match-1f3a...``)."""
    uid = uuid.uuid4().hex
    return f"{prefix}-{uid}" if prefix else uid


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime to ISO-8601, keeping None."""
    return value.isoformat() if value is not None else None


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 string written by :func:`format_timestamp`."""
    if not value:
        return None
    return isoparse(value)
