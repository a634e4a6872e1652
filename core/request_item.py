from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Final, Tuple

METHODS: Final[Tuple[str, ...]] = ("GET", "POST", "PUT", "PATCH", "DELETE")
AUTH_TYPES: Final[Tuple[str, ...]] = ("none", "bearer", "jwt", "api_key", "basic")
AUTH_LOCATIONS: Final[Tuple[str, ...]] = ("header", "query")

DEFAULT_REQUEST_NAME = "New Request"
DEFAULT_API_KEY_NAME = "X-API-Key"


@dataclass
class RequestItem:
    """Saved HTTP request as shown in the request list and editor."""
    id: str = ""
    name: str = ""
    method: str = "GET"
    url: str = ""
    header_key: str = ""
    header_value: str = ""
    body: str = ""
    auth_type: str = "none"
    auth_secret_ref: str = ""
    auth_key_name: str = ""
    auth_location: str = "header"
    auth_username: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RequestItem":
        known = {f.name for f in fields(cls)}
        values = {k: "" if v is None else str(v) for k, v in (data or {}).items() if k in known}
        item = cls(**values)
        item.method = normalize_method(item.method)
        if item.auth_type not in AUTH_TYPES:
            item.auth_type = "none"
        if item.auth_location not in AUTH_LOCATIONS:
            item.auth_location = "header"
        return item

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    def copy(self, **changes: Any) -> "RequestItem":
        return replace(self, **changes)

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match over name, method and url."""
        token = (needle or "").strip().lower()
        if not token:
            return True
        haystack = f"{self.name}\n{self.method}\n{self.url}".lower()
        return token in haystack

    @property
    def has_body(self) -> bool:
        return bool(self.body.strip())


def normalize_method(value: str) -> str:
    method = (value or "").strip().upper()
    return method if method in METHODS else "GET"


def cycle_choice(options: Tuple[str, ...], current: str, delta: int) -> str:
    """Step through a fixed choice list with wraparound in both directions."""
    if not options:
        return current
    if current not in options:
        return options[0] if delta >= 0 else options[-1]
    idx = options.index(current)
    return options[(idx + delta) % len(options)]


def looks_like_json(text: str) -> bool:
    stripped = (text or "").lstrip()
    return stripped.startswith("{") or stripped.startswith("[")
