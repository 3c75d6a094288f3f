"""Opening rendered images in the platform's default viewer."""

import logging
import platform
import subprocess
import time
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

DELAY_OPEN = 2.0


class GraphViewer:
    """Opens image files in a background viewer process.

    Viewers such as xdg-open ignore requests that arrive too quickly after
    each other, so calls closer together than ``delay`` seconds wait for
    ``delay`` seconds first. The next allowed time starts at 0, so the first
    call never waits.
    """

    def __init__(self, delay: float = DELAY_OPEN):
        self.delay = delay
        self.next_open = 0.0

    def open(self, path: Union[str, Path], delay: Optional[float] = None) -> None:
        """Open ``path`` in the default viewer without waiting for it.

        Args:
            path: Image file to show.
            delay: Throttle delay for this call, ``self.delay`` if None.
        """
        if delay is None:
            delay = self.delay

        if self.next_open > time.time():
            logger.debug("Delaying viewer launch")
            time.sleep(delay)

        command = self._command(str(path))
        logger.info(f"Opening {path} with {command[0]}")
        subprocess.Popen(
            command,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=platform.system() != "Windows",
        )

        self.next_open = time.time() + delay

    @staticmethod
    def _command(path: str) -> list[str]:
        system = platform.system()
        if system == "Windows":
            # "start" is a cmd builtin, the empty title keeps quoted paths intact
            return ["cmd", "/c", "start", "", path]
        if system == "Darwin":
            return ["open", path]
        return ["xdg-open", path]


_default_viewer: Optional[GraphViewer] = None


def default_viewer() -> GraphViewer:
    """Return the process-wide viewer, created on first use."""
    global _default_viewer
    if _default_viewer is None:
        _default_viewer = GraphViewer()
    return _default_viewer
