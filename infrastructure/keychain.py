"""Credential storage through the macOS `security` command line tool."""

import logging
import subprocess
import sys
from typing import List, Optional

from core import PlatformCapabilityError, SecretStoreError
from application.ports import SecretStore

logger = logging.getLogger("tuiman.keychain")

SERVICE = "tuiman"
SECURITY_BIN = "/usr/bin/security"


class KeychainSecretStore(SecretStore):
    """Generic-password items keyed by secret ref (account) under one service name."""

    def __init__(self, service: str = SERVICE, platform: Optional[str] = None, timeout: float = 10.0):
        self.service = service
        self.platform = platform or sys.platform
        self.timeout = timeout

    def _require_platform(self) -> None:
        if self.platform != "darwin":
            raise PlatformCapabilityError("Keychain secrets", "macOS only")

    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                [SECURITY_BIN, *args],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise PlatformCapabilityError("Keychain secrets", f"{SECURITY_BIN} not found") from exc
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise SecretStoreError(f"Keychain call failed: {exc}") from exc

    def get_secret(self, ref: str) -> Optional[str]:
        ref = (ref or "").strip()
        if not ref:
            return None
        self._require_platform()
        result = self._run(["find-generic-password", "-a", ref, "-s", self.service, "-w"])
        if result.returncode != 0:
            logger.debug("No keychain secret for ref %s (exit %s)", ref, result.returncode)
            return None
        return result.stdout.strip()

    def set_secret(self, ref: str, value: str) -> None:
        ref = (ref or "").strip()
        if not ref:
            raise SecretStoreError("secret ref is required")
        self._require_platform()
        result = self._run(["add-generic-password", "-a", ref, "-s", self.service, "-w", value, "-U"])
        if result.returncode != 0:
            raise SecretStoreError(f"failed to store keychain secret for {ref}")
        logger.info("Stored keychain secret for ref %s", ref)


__all__ = ["KeychainSecretStore", "SERVICE"]
