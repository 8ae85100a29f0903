"""JSON file store for numbered diagnostic snapshots."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import SnapshotError


class SnapshotStore:
    """
    Persist snapshot records as JSON, one file per category.

    Layout:
        <directory>/snapshots.json          index of taken snapshots
        <directory>/<id>/<category>.json    records of one category

    Any I/O or decode failure raises SnapshotError; a snapshot that cannot be
    written or read back is a failed pass, not a partial one.
    """

    INDEX_FILE = "snapshots.json"

    def __init__(self, directory: str = "yb_stats.snapshots", logger: Optional[logging.Logger] = None):
        """
        Initialize snapshot store.

        Args:
            directory: Root directory holding all snapshots
            logger: Optional logger instance
        """
        self.directory = Path(directory)
        self.logger = (logger or logging.getLogger(__name__)).getChild(self.__class__.__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_snapshots(self) -> List[Dict[str, Any]]:
        """Index entries ({number, timestamp, comment}), oldest first."""
        index_file = self.directory / self.INDEX_FILE
        if not index_file.exists():
            return []

        snapshots = self._read_json(index_file)
        if not isinstance(snapshots, list) or not all(self._valid_entry(s) for s in snapshots):
            raise SnapshotError(f"Malformed snapshot index {index_file}")
        return snapshots

    def next_snapshot_id(self) -> int:
        """Number for the next snapshot, 0 for an empty store."""
        snapshots = self.list_snapshots()
        if not snapshots:
            return 0
        return max(entry["number"] for entry in snapshots) + 1

    def register(self, snapshot_id: int, comment: str = "") -> None:
        """
        Record a snapshot in the index.

        Args:
            snapshot_id: Snapshot number
            comment: Free text shown by list_snapshots
        """
        snapshots = [s for s in self.list_snapshots() if s["number"] != snapshot_id]
        snapshots.append({
            "number": snapshot_id,
            "timestamp": datetime.now().astimezone().isoformat(),
            "comment": comment,
        })
        snapshots.sort(key=lambda s: s["number"])
        self._write_json(self.directory / self.INDEX_FILE, snapshots)

    def save(self, snapshot_id: int, category: str, records: List[Dict[str, Any]]) -> Path:
        """
        Store the records of one category for a snapshot.

        Args:
            snapshot_id: Snapshot number
            category: Category label, e.g. "clocks"
            records: JSON-serializable record dicts

        Returns:
            Path: File the records were written to

        Raises:
            SnapshotError: If the file cannot be written
        """
        path = self._category_file(snapshot_id, category)
        self._write_json(path, records)
        self.logger.info(f"Saved {len(records)} {category} record(s) to {path}")
        return path

    def load(self, snapshot_id: int, category: str) -> List[Dict[str, Any]]:
        """
        Read the records of one category back from a snapshot.

        Raises:
            SnapshotError: If the snapshot or category does not exist or is corrupt
        """
        path = self._category_file(snapshot_id, category)
        if not path.exists():
            raise SnapshotError(f"Snapshot {snapshot_id} has no {category} data ({path})")
        records = self._read_json(path)
        self.logger.debug(f"Loaded {len(records)} {category} record(s) from {path}")
        return records

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _valid_entry(entry: Any) -> bool:
        return (
            isinstance(entry, dict)
            and isinstance(entry.get("number"), int)
            and not isinstance(entry.get("number"), bool)
            and {"timestamp", "comment"} <= entry.keys()
        )

    def _category_file(self, snapshot_id: int, category: str) -> Path:
        return self.directory / str(snapshot_id) / f"{category}.json"

    def _read_json(self, path: Path) -> Any:
        try:
            with open(path, "r") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Failed to read {path}: {e}") from e

    def _write_json(self, path: Path, data: Any) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w") as f:
                json.dump(data, f, indent=2)
        except (OSError, TypeError) as e:
            raise SnapshotError(f"Failed to write {path}: {e}") from e
