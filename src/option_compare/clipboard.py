"""
Clipboard collaborators for copying share links
"""

import asyncio
import logging
import shutil
import subprocess
import sys
from typing import List, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)


class Clipboard(Protocol):
    """System clipboard interface"""

    async def write_text(self, text: str) -> None:
        """Primary facility; raises when unavailable"""
        ...

    def copy_via_selection(self, text: str) -> bool:
        """Synchronous fallback mechanism"""
        ...


async def copy_text(clipboard: Clipboard, text: str) -> bool:
    """
    Place text on the clipboard

    Tries the primary facility, then the synchronous fallback.

    Returns:
        True if either mechanism succeeded
    """
    try:
        await clipboard.write_text(text)
        return True
    except Exception as e:
        logger.warning(f"Clipboard write failed, trying fallback: {e}")

    try:
        copied = clipboard.copy_via_selection(text)
    except Exception as e:
        logger.error(f"Clipboard fallback failed: {e}")
        return False

    if not copied:
        logger.error("Clipboard fallback reported failure")
    return copied


def _platform_commands() -> List[List[str]]:
    if sys.platform == 'darwin':
        return [['pbcopy']]
    if sys.platform.startswith('win'):
        return [['clip']]
    return [['wl-copy'], ['xclip', '-selection', 'clipboard'], ['xsel', '--clipboard', '--input']]


class CommandClipboard:
    """Clipboard backed by the platform's copy command"""

    def __init__(self, commands: Optional[Sequence[Sequence[str]]] = None):
        self.commands = [list(c) for c in (commands or _platform_commands())]

    def _available(self) -> List[List[str]]:
        return [c for c in self.commands if shutil.which(c[0])]

    async def write_text(self, text: str) -> None:
        available = self._available()
        if not available:
            raise RuntimeError("No clipboard command available")

        command = available[0]
        process = await asyncio.create_subprocess_exec(
            *command,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE
        )
        _, stderr = await process.communicate(text.encode('utf-8'))
        if process.returncode != 0:
            raise RuntimeError(f"{command[0]} exited with {process.returncode}: {stderr.decode(errors='replace')}")

    def copy_via_selection(self, text: str) -> bool:
        # the primary path already used the first command
        for command in self._available()[1:]:
            result = subprocess.run(command, input=text.encode('utf-8'), capture_output=True)
            if result.returncode == 0:
                return True
            logger.warning(f"{command[0]} exited with {result.returncode}")
        return False
