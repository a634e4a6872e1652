from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from .request_item import RequestItem

SNAPSHOT_BODY_MARKER = "\nbody:\n"


@dataclass
class HttpResult:
    status_code: int = 0
    duration_ms: int = 0
    body: str = ""
    error: str = ""

    @property
    def transport_failed(self) -> bool:
        return is_transport_failure(self.status_code)


@dataclass
class RunEntry:
    """One executed request as persisted in the run history."""
    id: int = 0
    request_id: str = ""
    request_name: str = ""
    method: str = ""
    url: str = ""
    status_code: int = 0
    duration_ms: int = 0
    error: str = ""
    created_at: str = ""
    request_snapshot: str = ""
    response_body: str = ""

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "RunEntry":
        return cls(
            id=int(row.get("id") or 0),
            request_id=str(row.get("request_id") or ""),
            request_name=str(row.get("request_name") or ""),
            method=str(row.get("method") or ""),
            url=str(row.get("url") or ""),
            status_code=int(row.get("status_code") or 0),
            duration_ms=int(row.get("duration_ms") or 0),
            error=str(row.get("error") or ""),
            created_at=str(row.get("created_at") or ""),
            request_snapshot=str(row.get("request_snapshot") or ""),
            response_body=str(row.get("response_body") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def transport_failed(self) -> bool:
        return is_transport_failure(self.status_code)

    @property
    def status_label(self) -> str:
        return "ERR" if self.transport_failed else f"[{self.status_code}]"

    def matches(self, needle: str) -> bool:
        token = (needle or "").strip().lower()
        if not token:
            return True
        haystack = f"{self.request_name}\n{self.method}\n{self.url}\n{self.status_code}\n{self.error}".lower()
        return token in haystack


@dataclass
class ParsedSnapshot:
    fields: Dict[str, str] = field(default_factory=dict)
    body: str = "(empty)"


def is_transport_failure(status_code: Optional[int]) -> bool:
    """A run failed in transport when no HTTP status came back at all."""
    return (status_code or 0) <= 0


def status_style(status_code: Optional[int]) -> str:
    """Style class name for an HTTP status code."""
    if status_code is None:
        return "hint"
    if status_code >= 500:
        return "error"
    if status_code >= 400:
        return "warn"
    if status_code >= 300:
        return "section"
    if status_code >= 200:
        return "ok"
    return "hint"


def build_request_snapshot(req: RequestItem) -> str:
    if req.header_key or req.header_value:
        header = f"header: {req.header_key}: {req.header_value}"
    else:
        header = "header: none"
    return "\n".join(
        [
            f"name: {req.name or '(unnamed)'}",
            f"method: {req.method}",
            f"url: {req.url}",
            f"auth: {req.auth_type or 'none'}",
            f"secret_ref: {req.auth_secret_ref or '(none)'}",
            f"auth_key_name: {req.auth_key_name or '(none)'}",
            f"auth_location: {req.auth_location or '(none)'}",
            f"auth_username: {req.auth_username or '(none)'}",
            header,
            "body:",
            req.body or "(empty)",
        ]
    )


def parse_request_snapshot(snapshot: str) -> ParsedSnapshot:
    raw = snapshot or ""
    meta, marker, body = raw.partition(SNAPSHOT_BODY_MARKER)
    parsed: Dict[str, str] = {}
    for line in meta.split("\n"):
        key, sep, value = line.strip().partition(":")
        if not sep:
            continue
        parsed[key.strip()] = value.strip()
    return ParsedSnapshot(fields=parsed, body=(body if marker else "") or "(empty)")
