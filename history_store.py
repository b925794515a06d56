import json
import logging
import time
import uuid
from pathlib import Path
from typing import Any, Dict, List

from artifact_writer import ArtifactWriteError, atomic_write_text

logger = logging.getLogger(__name__)

RECORD_PREFIX = "audit_"
MAX_ID_ATTEMPTS = 5


class AuditHistoryStore:
    """
    Append-only directory of audit records, one JSON file per run.
    Records are written once and never updated, merged or deleted.
    """

    def __init__(self, history_dir: Path):
        self.history_dir = history_dir

    def record_path(self, record_id: str) -> Path:
        return self.history_dir / f"{RECORD_PREFIX}{record_id}.json"

    @staticmethod
    def new_id() -> str:
        # millisecond timestamp keeps ids sortable; the suffix keeps them unique
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"

    def persist(self, record: Dict[str, Any]) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            record_id = self.new_id()
            if not self.record_path(record_id).exists():
                break
        else:
            raise ArtifactWriteError(f"Could not allocate a unique record id in {self.history_dir}")

        data = {"id": record_id}
        data.update({k: v for k, v in record.items() if k != "id"})
        content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        atomic_write_text(self.record_path(record_id), content, overwrite=False)
        logger.debug("Persisted audit record %s", record_id)
        return record_id

    def load(self, record_id: str) -> Dict[str, Any]:
        with open(self.record_path(record_id), "r", encoding="utf-8") as f:
            return json.load(f)

    def list_records(self) -> List[Dict[str, Any]]:
        """Short descriptors of every readable record, oldest first."""
        if not self.history_dir.is_dir():
            return []
        records = []
        for path in sorted(self.history_dir.glob(f"{RECORD_PREFIX}*.json")):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                logger.warning("Skipping unreadable history record %s: %s", path.name, e)
                continue
            summary = data.get("summary", {})
            records.append({
                "id": data.get("id", path.stem[len(RECORD_PREFIX):]),
                "timestamp": data.get("timestamp"),
                "project": data.get("project"),
                "mode": summary.get("mode"),
                "health": summary.get("health"),
            })
        records.sort(key=lambda r: (r["timestamp"] or "", r["id"]))
        return records
