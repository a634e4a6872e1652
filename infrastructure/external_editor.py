import logging
import os
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import List, Mapping, Optional

from application.ports import TextEditor

logger = logging.getLogger("tuiman.editor")


def editor_command(env: Optional[Mapping[str, str]] = None) -> List[str]:
    """$VISUAL, then $EDITOR, then vi."""
    env = os.environ if env is None else env
    for name in ("VISUAL", "EDITOR"):
        value = (env.get(name) or "").strip()
        if value:
            return shlex.split(value)
    return ["vi"]


class ExternalEditor(TextEditor):
    """Round-trip text through a full-screen editor on a temp file.

    Blocks until the editor exits; the caller is responsible for suspending
    its own renderer around the call.
    """

    def __init__(self, command: Optional[List[str]] = None, suffix: str = ".txt"):
        self.command = command
        self.suffix = suffix

    def edit(self, initial_text: str) -> Optional[str]:
        command = self.command or editor_command()
        fd, name = tempfile.mkstemp(prefix="tuiman-", suffix=self.suffix)
        path = Path(name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(initial_text or "")
            try:
                result = subprocess.run([*command, str(path)])
            except OSError as exc:
                logger.warning("Editor %s failed to start: %s", command[0], exc)
                return None
            if result.returncode != 0:
                logger.info("Editor %s exited with %s", command[0], result.returncode)
                return None
            return path.read_text(encoding="utf-8")
        finally:
            path.unlink(missing_ok=True)


__all__ = ["ExternalEditor", "editor_command"]
