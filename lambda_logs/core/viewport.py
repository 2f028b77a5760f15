"""
Viewport Module - Scroll window arithmetic

Two policies live here and are intentionally kept apart:
- follow: incremental movement only shifts the window when the cursor
  leaves it, so the list does not jitter while stepping through rows
- centering: a full recomputation that places the cursor in the middle
  of the window, used when the window has to be rebuilt (e.g. resize)
"""
from typing import Optional, Tuple


def follow_offset(cursor: int, offset: int, visible_height: int) -> int:
    """
    Adjust a window offset so that the cursor stays visible

    Args:
        cursor: Index of the selected row
        offset: Current index of the first visible row
        visible_height: Number of rows in the window

    Returns:
        The new offset; unchanged while the cursor is inside the window
    """
    visible_height = max(visible_height, 1)
    if cursor >= offset + visible_height:
        return max(cursor - (visible_height - 1), 0)
    if cursor < offset:
        return cursor
    return offset


def centered_window(selected: Optional[int], total: int,
                    visible_height: int) -> Tuple[int, int]:
    """
    Compute a [start, end) window centred on the selected row

    The window never starts before 0 and never extends past the end; near
    the end it is pinned to show the last ``visible_height`` rows.

    Args:
        selected: Selected index, or None when nothing is selected
        total: Number of rows
        visible_height: Number of rows in the window

    Returns:
        (start, end) indices of the rows to render
    """
    visible_height = max(visible_height, 0)
    if selected is None:
        return 0, min(visible_height, total)

    half_height = visible_height // 2
    if selected + half_height >= total:
        start = max(total - visible_height, 0)
    else:
        start = max(selected - half_height, 0)
    end = min(start + visible_height, total)
    return start, end
