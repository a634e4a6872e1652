from pathlib import Path
from typing import List, Optional, Protocol

from core import HttpResult, RequestItem, RunEntry


class RequestRepository(Protocol):
    def list(self) -> List[RequestItem]:
        ...

    def save(self, item: RequestItem) -> RequestItem:
        ...

    def delete(self, request_id: str) -> bool:
        ...


class HistoryRepository(Protocol):
    def list(self, limit: int = 200) -> List[RunEntry]:
        ...

    def record(self, run: RunEntry) -> int:
        ...


class RequestExecutor(Protocol):
    def execute(self, item: RequestItem) -> HttpResult:
        ...


class SecretStore(Protocol):
    def get_secret(self, ref: str) -> Optional[str]:
        ...

    def set_secret(self, ref: str, value: str) -> None:
        ...


class ExportResult(Protocol):
    directory: Path
    count: int
    scrubbed_count: int


class RequestExchange(Protocol):
    def export_all(self, target_dir: Optional[Path] = None) -> ExportResult:
        ...

    def import_all(self, source_dir: Path) -> int:
        ...


class TextEditor(Protocol):
    def edit(self, initial_text: str) -> Optional[str]:
        ...


class Clipboard(Protocol):
    def read_text(self) -> str:
        ...

    def write_text(self, text: str) -> None:
        ...
