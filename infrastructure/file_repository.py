import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from core import DEFAULT_REQUEST_NAME, RequestItem, StoreError, normalize_method
from application.ports import RequestRepository

logger = logging.getLogger("tuiman.store")


def now_iso() -> str:
    """UTC timestamp without fractional seconds, e.g. 2024-05-01T10:00:00Z."""
    return datetime.now(timezone.utc).replace(microsecond=0).strftime("%Y-%m-%dT%H:%M:%SZ")


class FileRequestRepository(RequestRepository):
    """One pretty-printed JSON document per request inside requests_dir."""

    def __init__(self, requests_dir: Path):
        self.requests_dir = Path(requests_dir)

    def _resolve_path(self, request_id: str) -> Path:
        # SEC: ids become file names, reject anything that could escape requests_dir
        if not request_id or ".." in request_id or "/" in request_id or "\\" in request_id:
            raise ValueError(f"Invalid request id: {request_id!r}")
        resolved = (self.requests_dir / f"{request_id}.json").resolve()
        if not resolved.is_relative_to(self.requests_dir.resolve()):
            raise ValueError(f"Path traversal detected: {resolved} is outside {self.requests_dir}")
        return resolved

    def list(self) -> List[RequestItem]:
        if not self.requests_dir.exists():
            return []
        items: List[RequestItem] = []
        for path in self.requests_dir.glob("*.json"):
            if not path.is_file():
                continue
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                logger.warning("Skipping unreadable request file %s: %s", path, exc)
                continue
            if not isinstance(data, dict):
                logger.warning("Skipping request file %s: not a JSON object", path)
                continue
            item = RequestItem.from_dict(data)
            if not item.id:
                item.id = path.stem
            items.append(item)
        items.sort(key=lambda item: item.name.lower())
        return items

    def save(self, item: RequestItem) -> RequestItem:
        stored = item.copy(
            id=item.id or str(uuid.uuid4()),
            name=item.name or DEFAULT_REQUEST_NAME,
            method=normalize_method(item.method),
            auth_type=item.auth_type or "none",
            updated_at=now_iso(),
        )
        path = self._resolve_path(stored.id)
        try:
            self.requests_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(stored.to_dict(), indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Failed to save request {stored.id}: {exc}") from exc
        logger.debug("Saved request %s (%s)", stored.id, stored.name)
        return stored

    def delete(self, request_id: str) -> bool:
        path = self._resolve_path(request_id)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as exc:
            raise StoreError(f"Failed to delete request {request_id}: {exc}") from exc
        logger.debug("Deleted request %s", request_id)
        return True


__all__ = ["FileRequestRepository", "now_iso"]
