"""Bulk export/import of saved requests as a directory of JSON files."""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from core import ExchangeError, RequestItem
from application.ports import RequestExchange, RequestRepository
from infrastructure.file_repository import now_iso

logger = logging.getLogger("tuiman.exchange")

MANIFEST_NAME = "manifest.json"


@dataclass
class ExportResult:
    directory: Path
    count: int
    scrubbed_count: int


def default_export_dir(now: Optional[datetime] = None) -> Path:
    stamp = (now or datetime.now()).strftime("%Y%m%d-%H%M%S")
    return Path(".") / f"tuiman-export-{stamp}"


def _dump(path: Path, payload: dict) -> None:
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


class DirectoryExchange(RequestExchange):
    def __init__(self, repository: RequestRepository, clock: Callable[[], datetime] = datetime.now):
        self.repository = repository
        self.clock = clock

    def export_all(self, target_dir: Optional[Path] = None) -> ExportResult:
        directory = Path(target_dir) if target_dir else default_export_dir(self.clock())
        requests_dir = directory / "requests"
        items = self.repository.list()
        scrubbed = 0
        try:
            requests_dir.mkdir(parents=True, exist_ok=True)
            for item in items:
                payload = item.to_dict()
                if payload.get("auth_secret_ref"):
                    scrubbed += 1
                    payload["auth_secret_ref"] = ""
                _dump(requests_dir / f"{item.id}.json", payload)
            _dump(
                directory / MANIFEST_NAME,
                {
                    "exported_at": now_iso(),
                    "request_count": len(items),
                    "scrubbed_secret_ref_count": scrubbed,
                },
            )
        except OSError as exc:
            raise ExchangeError(f"Export to {directory} failed: {exc}") from exc
        logger.info("Exported %s requests to %s (%s secret refs scrubbed)", len(items), directory, scrubbed)
        return ExportResult(directory=directory, count=len(items), scrubbed_count=scrubbed)

    def import_all(self, source_dir: Path) -> int:
        requests_dir = Path(source_dir) / "requests"
        if not requests_dir.is_dir():
            raise ExchangeError(f"No requests/ directory in {source_dir}")
        imported = 0
        for path in sorted(requests_dir.glob("*.json")):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise ExchangeError(f"Cannot read {path.name}: {exc}") from exc
            if not isinstance(data, dict):
                raise ExchangeError(f"{path.name} is not a JSON object")
            self.repository.save(RequestItem.from_dict(data))
            imported += 1
        logger.info("Imported %s requests from %s", imported, source_dir)
        return imported


__all__ = ["DirectoryExchange", "ExportResult", "default_export_dir", "MANIFEST_NAME"]
