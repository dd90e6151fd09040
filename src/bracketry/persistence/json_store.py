"""Tournament snapshots stored as one JSON file per tournament."""

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

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from bracketry.constants import SAVE_FILE_EXTENSION
from bracketry.exceptions import PersistenceException, SnapshotLoadException
from bracketry.models.tournament.tournament import Tournament
from bracketry.type_hints import Snapshot
from bracketry.utils import setup_logger

logger = setup_logger(__name__)


class JsonSnapshotStore:
    """Reads and writes tournament snapshots under ``directory``.

    Files are named ``<tournament id>.json``. The directory is created on the
    first write.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, tournament_id: str) -> Path:
        return self.directory / f"{tournament_id}{SAVE_FILE_EXTENSION}"

    def save(self, tournament: Tournament) -> Path:
        """Write the full state of ``tournament``."""
        return self.save_snapshot(tournament.to_dict())

    def save_snapshot(self, snapshot: Snapshot) -> Path:
        """Write an already serialized tournament.

        Raises:
            PersistenceException: If the file cannot be written
        """
        return self.write_path(self.path_for(snapshot["id"]), snapshot)

    @staticmethod
    def write_path(path: Union[str, Path], snapshot: Snapshot) -> Path:
        """Write a serialized tournament to an arbitrary file."""
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(snapshot, f, indent=2)
        except OSError as exc:
            raise PersistenceException(f"Could not write {path}: {exc}") from exc
        logger.debug(f"Saved tournament {snapshot['id']} to {path}")
        return path

    def load(self, tournament_id: str) -> Tournament:
        """Read a tournament back.

        Raises:
            SnapshotLoadException: If the file is missing or not a valid
                tournament snapshot
        """
        return self.load_path(self.path_for(tournament_id))

    @staticmethod
    def load_path(path: Union[str, Path]) -> Tournament:
        """Read a tournament from an arbitrary snapshot file."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data: Dict[str, Any] = json.load(f)
        except FileNotFoundError as exc:
            raise SnapshotLoadException(f"No snapshot at {path}") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise SnapshotLoadException(f"Could not read {path}: {exc}") from exc
        try:
            return Tournament.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise SnapshotLoadException(
                f"{path} is not a valid tournament snapshot: {exc}"
            ) from exc

    def list_ids(self) -> List[str]:
        """Ids of every stored tournament, sorted."""
        if not self.directory.is_dir():
            return []
        return sorted(p.stem for p in self.directory.glob(f"*{SAVE_FILE_EXTENSION}"))

    def delete(self, tournament_id: str) -> bool:
        """Remove a snapshot; returns False if there was none."""
        path = self.path_for(tournament_id)
        if not path.exists():
            return False
        path.unlink()
        logger.info(f"Deleted snapshot of tournament {tournament_id}")
        return True
