"""System clipboard access through native command line tools."""

import shutil
import subprocess
from typing import List, Optional, Sequence

from core import PlatformCapabilityError

PASTE_COMMANDS: Sequence[List[str]] = (
    ["pbpaste"],
    ["wl-paste", "-n"],
    ["xclip", "-selection", "clipboard", "-out"],
)
COPY_COMMANDS: Sequence[List[str]] = (
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard", "-in"],
)

CLIPBOARD_FEATURE = "System clipboard shortcuts"


class NativeClipboard:
    """Clipboard backed by pbcopy/pbpaste, wl-clipboard or xclip, whichever is installed."""

    def __init__(self, timeout: float = 1.0, which=shutil.which):
        self.timeout = timeout
        self._which = which

    def _first_available(self, commands: Sequence[List[str]]) -> Optional[List[str]]:
        for cmd in commands:
            if self._which(cmd[0]):
                return cmd
        return None

    def read_text(self) -> str:
        cmd = self._first_available(PASTE_COMMANDS)
        if cmd is None:
            raise PlatformCapabilityError(CLIPBOARD_FEATURE, "needs pbpaste, wl-paste or xclip")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise PlatformCapabilityError(CLIPBOARD_FEATURE, str(exc)) from exc
        if result.returncode != 0:
            return ""
        return result.stdout

    def write_text(self, text: str) -> None:
        cmd = self._first_available(COPY_COMMANDS)
        if cmd is None:
            raise PlatformCapabilityError(CLIPBOARD_FEATURE, "needs pbcopy, wl-copy or xclip")
        try:
            subprocess.run(cmd, input=str(text or ""), text=True, timeout=self.timeout, check=True)
        except (OSError, subprocess.SubprocessError) as exc:
            raise PlatformCapabilityError(CLIPBOARD_FEATURE, str(exc)) from exc


__all__ = ["NativeClipboard", "PASTE_COMMANDS", "COPY_COMMANDS"]
