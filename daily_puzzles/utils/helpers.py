"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Any, Dict, Optional, Tuple


def format_time(seconds: int) -> str:
    """Format elapsed seconds as MM:SS."""
    minutes, secs = divmod(max(int(seconds), 0), 60)
    return f"{minutes:02d}:{secs:02d}"


def parse_coord(data: Optional[Dict[str, Any]]) -> Optional[Tuple[int, int]]:
    """Read a ``{row, col}`` pair from a request payload, or None if it is not two integers."""
    if not isinstance(data, dict):
        return None
    row, col = data.get('row'), data.get('col')
    if isinstance(row, bool) or isinstance(col, bool):
        return None
    if not isinstance(row, int) or not isinstance(col, int):
        return None
    return row, col


def sorted_coords(coords) -> list:
    """Coordinates as sorted [row, col] lists for JSON responses."""
    return [list(coord) for coord in sorted(coords)]
