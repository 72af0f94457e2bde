# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the spinner module. This module will allow the application to:

# 1. Show something is happening while npm and friends grind away

# 2. Clean up after itself so the next progress line starts on a fresh line

from __future__ import annotations

import sys
import threading
import time
from typing import TextIO

from .colors import Palette, apply_color, color_enabled

###########################################################################

"""

Name: Spinner

Function: An animated spinner that runs in a daemon thread while a check is

busy. It only touches the terminal, never the findings, and it stays off

entirely when colors are disabled (pipes and CI logs don't want \r noise).

Use it as a context manager around the slow bit.

Arguments: None (it's a class definition)

Returns: No value returned

"""

class Spinner:
    def __init__(
        self,
        prefix: str = "  ",
        frames: list[str] | None = None,
        interval: float = 0.1,
        stream: TextIO | None = None,
    ) -> None:
        ### Text to display before the spinner animation
        self.prefix = prefix
        ### Characters to cycle through (the classic | / - \)
        self.frames = frames or ["|", "/", "-", "\\"]
        ### Seconds between frames
        self.interval = interval
        ### Where to draw (stdout unless told otherwise)
        self.stream = stream or sys.stdout
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def __enter__(self) -> "Spinner":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    ###########################################################################

    """

    Name: start

    Function: Start the animation thread. Does nothing when already running or

    when colors are disabled.

    Arguments: None

    Returns: No value returned

    """

    def start(self) -> None:
        if self._thread is not None or not color_enabled():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._animate, daemon=True)
        self._thread.start()

#$ End start

    ###########################################################################

    """

    Name: stop

    Function: Stop the animation and erase the spinner from the line.

    Arguments: None

    Returns: No value returned

    """

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join(timeout=1)
        self._thread = None
        ### Erase the spinner by writing spaces and moving the cursor back
        self.stream.write("\r" + " " * (len(self.prefix) + 4) + "\r")
        self.stream.flush()

#$ End stop

    def _animate(self) -> None:
        idx = 0
        while not self._stop.is_set():
            frame = self.frames[idx % len(self.frames)]
            self.stream.write(f"\r{self.prefix}{apply_color(frame, Palette.DIM)} ")
            self.stream.flush()
            time.sleep(self.interval)
            idx += 1

#$ End _animate

#$ End Spinner
