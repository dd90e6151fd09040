"""Debounced background writes of tournament snapshots.

The engine hands every committed state to :class:`DebouncedSync`, which
serializes it right away and writes it once no newer state arrived for
``delay`` seconds. A failed write never affects the engine: it is logged and
reported as a warning on the next operation.
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

import threading
from typing import Callable, List, Optional

from bracketry.constants import DEFAULT_SYNC_DELAY
from bracketry.models.tournament.tournament import Tournament
from bracketry.type_hints import Snapshot
from bracketry.utils import setup_logger

logger = setup_logger(__name__)

Writer = Callable[[Snapshot], object]


class DebouncedSync:
    """Writes the latest scheduled snapshot after a quiet period.

    Args:
        writer: Called with the serialized tournament, e.g.
            ``JsonSnapshotStore(...).save_snapshot``
        delay: Seconds to wait for a newer snapshot before writing
        on_warning: Optional callback receiving each failure message
    """

    def __init__(
        self,
        writer: Writer,
        delay: float = DEFAULT_SYNC_DELAY,
        on_warning: Optional[Callable[[str], None]] = None,
    ):
        self.writer = writer
        self.delay = delay
        self.on_warning = on_warning
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[Snapshot] = None
        self._warnings: List[str] = []

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def schedule(self, tournament: Tournament) -> None:
        """Queue the current state, replacing any write not yet done."""
        snapshot = tournament.to_dict()
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = snapshot
            self._timer = threading.Timer(self.delay, self._write_pending)
            self._timer.daemon = True
            self._timer.start()
        logger.debug(f"Sync of tournament {snapshot['id']} scheduled")

    def flush(self) -> None:
        """Write the pending snapshot now, if there is one."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        self._write_pending()

    def cancel(self) -> None:
        """Drop the pending snapshot without writing it."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None

    def pending_warnings(self) -> List[str]:
        """Return and clear the failures collected since the last call."""
        with self._lock:
            warnings, self._warnings = self._warnings, []
        return warnings

    def _write_pending(self) -> None:
        with self._lock:
            snapshot, self._pending = self._pending, None
            self._timer = None
        if snapshot is None:
            return
        try:
            self.writer(snapshot)
        except Exception as exc:
            message = f"Sync of tournament {snapshot.get('id')} failed: {exc}"
            logger.warning(message)
            with self._lock:
                self._warnings.append(message)
            if self.on_warning is not None:
                self.on_warning(message)
            return
        logger.debug(f"Tournament {snapshot.get('id')} synced")
