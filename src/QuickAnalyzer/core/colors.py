# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the colors module. This module will allow the application to:

# 1. Define ANSI color codes for the progress output

# 2. Check if the terminal supports colors

# 3. Apply colors to text strings (and pick one per finding kind)

# 4. Enable/disable color output (--no-color, pipes, dumb terminals)

from __future__ import annotations

import os
import sys

from .findings import Kind

###########################################################################

"""

Name: Palette

Function: The ANSI escape codes we paint the terminal with.

Arguments: None (it's a class with constants)

Returns: No value returned

"""

class Palette:
    ### Errors and failed builds
    RED = "\033[91m"
    ### Warnings and skipped checks
    YELLOW = "\033[93m"
    ### Passing checks
    GREEN = "\033[92m"
    ### Stage headers
    CYAN = "\033[96m"
    ### Security findings
    MAGENTA = "\033[95m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RESET = "\033[0m"

#$ End Palette

### Which color each kind of finding gets on the console
KIND_COLORS = {
    Kind.ERROR: Palette.RED,
    Kind.SECURITY: Palette.MAGENTA,
    Kind.WARNING: Palette.YELLOW,
}

###########################################################################

"""

Name: supports_color

Function: Check if the stream is a real terminal that can show colors. Pipes,

files and TERM=dumb all get plain text.

Arguments: stream - the output stream to check (defaults to stdout)

Returns: Boolean - True if colors are supported, False otherwise

"""

def supports_color(stream: object = sys.stdout) -> bool:
    return hasattr(stream, "isatty") and stream.isatty() and os.environ.get("TERM", "") != "dumb"

#$ End supports_color

### Decided once at import time, --no-color can still switch it off
ENABLE_COLOR = supports_color()

###########################################################################

"""

Name: apply_color

Function: Wrap text in color codes. Empty text or disabled colors get the text

back untouched.

Arguments: text - the string to colorize, *codes - color codes from Palette

Returns: The colored string (or plain string if colors are disabled)

"""

def apply_color(text: str, *codes: str) -> str:
    if not text or not ENABLE_COLOR:
        return text
    return "".join(codes) + text + Palette.RESET

#$ End apply_color

def kind_color(kind: Kind) -> str:
    return KIND_COLORS.get(kind, Palette.DIM)

#$ End kind_color

###########################################################################

"""

Name: set_color_enabled

Function: Enable or disable color output globally (the spinner follows along).

Arguments: enabled - boolean to enable (True) or disable (False) colors

Returns: No value returned

"""

def set_color_enabled(enabled: bool) -> None:
    global ENABLE_COLOR
    ENABLE_COLOR = enabled

#$ End set_color_enabled

def color_enabled() -> bool:
    return ENABLE_COLOR

#$ End color_enabled
