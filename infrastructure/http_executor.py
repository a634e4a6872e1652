import base64
import logging
import time
from typing import Dict, Optional, Tuple

import requests

from core import DEFAULT_API_KEY_NAME, HttpResult, RequestItem, TuimanError, looks_like_json
from application.ports import RequestExecutor, SecretStore

logger = logging.getLogger("tuiman.http")

DEFAULT_TIMEOUT = 30


class RequestsExecutor(RequestExecutor):
    """Send a RequestItem over HTTP; failures come back as HttpResult.error, never as exceptions."""

    def __init__(
        self,
        secrets: Optional[SecretStore] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.secrets = secrets
        self.session = session or requests.Session()
        self.timeout = timeout

    def _secret(self, ref: str) -> Optional[str]:
        if not ref or self.secrets is None:
            return None
        return self.secrets.get_secret(ref)

    def prepare(self, item: RequestItem) -> Tuple[Dict[str, str], Dict[str, str]]:
        """Build (headers, query params) including auth injection."""
        headers: Dict[str, str] = {}
        params: Dict[str, str] = {}
        if item.header_key:
            headers[item.header_key] = item.header_value

        auth = item.auth_type
        if auth in ("bearer", "jwt") and item.auth_secret_ref:
            secret = self._secret(item.auth_secret_ref)
            if secret:
                headers["Authorization"] = f"Bearer {secret}"
        elif auth == "api_key" and item.auth_secret_ref:
            secret = self._secret(item.auth_secret_ref)
            if secret:
                key_name = item.auth_key_name or DEFAULT_API_KEY_NAME
                if item.auth_location == "query":
                    params[key_name] = secret
                else:
                    headers[key_name] = secret
        elif auth == "basic" and item.auth_secret_ref:
            secret = self._secret(item.auth_secret_ref)
            if secret is not None:
                token = base64.b64encode(f"{item.auth_username}:{secret}".encode("utf-8")).decode("ascii")
                headers["Authorization"] = f"Basic {token}"

        if item.body and looks_like_json(item.body) and item.header_key.lower() != "content-type":
            headers["Content-Type"] = "application/json"
            headers["Accept"] = "application/json"
        return headers, params

    def execute(self, item: RequestItem) -> HttpResult:
        started = time.monotonic()

        def elapsed() -> int:
            return int(round((time.monotonic() - started) * 1000))

        try:
            headers, params = self.prepare(item)
            resp = self.session.request(
                item.method,
                item.url,
                headers=headers,
                params=params or None,
                data=item.body.encode("utf-8") if item.body else None,
                timeout=self.timeout,
            )
        except (requests.RequestException, TuimanError, ValueError) as exc:
            logger.info("%s %s failed: %s", item.method, item.url, exc)
            return HttpResult(status_code=0, duration_ms=elapsed(), body="", error=str(exc) or type(exc).__name__)

        error = "" if 200 <= resp.status_code < 300 else f"HTTP status {resp.status_code}"
        logger.debug("%s %s -> %s in %sms", item.method, item.url, resp.status_code, elapsed())
        return HttpResult(status_code=resp.status_code, duration_ms=elapsed(), body=resp.text, error=error)


__all__ = ["RequestsExecutor", "DEFAULT_TIMEOUT"]
