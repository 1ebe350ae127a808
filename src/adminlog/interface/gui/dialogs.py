from __future__ import annotations

"""
Native Path Selection Dialogs.

One synchronous call that shows the platform's open-file, save-file or
folder picker and returns the chosen path, or None when the user cancels.
Scripts use it to pick CSV inputs, report destinations and log folders.
"""

import logging
import os
from enum import Enum
from typing import List, Optional, Tuple

import customtkinter as ctk

logger = logging.getLogger(__name__)

ALL_FILES_FILTER = "All files (*.*)|*.*"


class PathMode(str, Enum):
    OPEN_FILE = "open"
    SAVE_FILE = "save"
    FOLDER = "folder"


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def select_path(
        mode: PathMode,
        title: str,
        file_filter: Optional[str] = None,
        initial_directory: Optional[str] = None,
) -> Optional[str]:
    """
    Show a native picker and wait for the user's choice.

    Args:
        mode: Which dialog to open.
        title: Window title.
        file_filter: Windows-style filter, e.g. 'CSV files (*.csv)|*.csv'.
                     Ignored for folders.
        initial_directory: Folder the dialog starts in, if it exists.

    Returns:
        Optional[str]: Absolute path selected, or None if canceled.
    """
    mode = PathMode(mode)
    options = {"title": title}
    if initial_directory and os.path.isdir(initial_directory):
        options["initialdir"] = initial_directory

    root = ctk.CTk()
    root.withdraw()
    try:
        if mode == PathMode.FOLDER:
            result = ctk.filedialog.askdirectory(parent=root, **options)
        else:
            filetypes = parse_file_filter(file_filter or ALL_FILES_FILTER)
            if mode == PathMode.OPEN_FILE:
                result = ctk.filedialog.askopenfilename(parent=root, filetypes=filetypes, **options)
            else:
                result = ctk.filedialog.asksaveasfilename(
                    parent=root,
                    filetypes=filetypes,
                    defaultextension=_default_extension(filetypes),
                    **options,
                )
    finally:
        root.destroy()

    if not result:
        logger.debug(f"UI: {mode.value} dialog canceled")
        return None

    path = os.path.abspath(str(result))
    logger.debug(f"UI: {mode.value} dialog -> {path}")
    return path


def parse_file_filter(file_filter: str) -> List[Tuple[str, str]]:
    """
    Translate a 'Label|pattern|Label|pattern' filter into Tk filetypes.

    Multiple patterns for one label may be separated with ';'. A trailing
    label without a pattern is dropped.

    Args:
        file_filter: Windows-style filter string.

    Returns:
        List[Tuple[str, str]]: (label, space-separated patterns) pairs.
    """
    parts = [p.strip() for p in file_filter.split("|")]
    pairs: List[Tuple[str, str]] = []
    for i in range(0, len(parts) - 1, 2):
        label, patterns = parts[i], parts[i + 1]
        if not patterns:
            continue
        pairs.append((label or patterns, " ".join(x.strip() for x in patterns.split(";") if x.strip())))
    return pairs or [("All files", "*.*")]


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _default_extension(filetypes: List[Tuple[str, str]]) -> str:
    """First concrete extension of the first filter, e.g. '.csv'."""
    first = filetypes[0][1].split()[0] if filetypes else ""
    ext = os.path.splitext(first)[1]
    return "" if ext in ("", ".*") else ext
