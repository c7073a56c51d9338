"""
Small helpers shared by the client and the header builder.
"""

from typing import Any, Dict, Mapping, Optional


def remove_none_values(data: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Return a copy of ``data`` without the entries whose value is None.

    Example:
        >>> remove_none_values({"a": 1, "b": None})
        {'a': 1}
    """
    if not data:
        return {}
    return {key: value for key, value in data.items() if value is not None}
