from .errors import (
    TuimanError,
    ValidationError,
    StoreError,
    HistoryError,
    ExchangeError,
    SecretStoreError,
    PlatformCapabilityError,
)
from .request_item import (
    RequestItem,
    METHODS,
    AUTH_TYPES,
    AUTH_LOCATIONS,
    DEFAULT_REQUEST_NAME,
    DEFAULT_API_KEY_NAME,
    cycle_choice,
    looks_like_json,
    normalize_method,
)
from .run_entry import (
    HttpResult,
    RunEntry,
    ParsedSnapshot,
    build_request_snapshot,
    parse_request_snapshot,
    is_transport_failure,
    status_style,
)

__all__ = [
    # Errors
    "TuimanError",
    "ValidationError",
    "StoreError",
    "HistoryError",
    "ExchangeError",
    "SecretStoreError",
    "PlatformCapabilityError",
    # Requests
    "RequestItem",
    "METHODS",
    "AUTH_TYPES",
    "AUTH_LOCATIONS",
    "DEFAULT_REQUEST_NAME",
    "DEFAULT_API_KEY_NAME",
    "cycle_choice",
    "looks_like_json",
    "normalize_method",
    # Runs
    "HttpResult",
    "RunEntry",
    "ParsedSnapshot",
    "build_request_snapshot",
    "parse_request_snapshot",
    "is_transport_failure",
    "status_style",
]
