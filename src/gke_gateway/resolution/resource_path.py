"""Helpers for Compute Engine resource paths such as
``projects/p/global/targetHttpsProxies/proxy-1``."""
from typing import List


def path_segments(path: str) -> List[str]:
    return path.split("/")


def resource_name(path: str) -> str:
    """Trailing segment of a resource path."""
    return path_segments(path)[-1]


def resource_kind(path: str) -> str:
    """Second-to-last segment of a resource path, or "" if there is none."""
    segments = path_segments(path)
    if len(segments) < 2:
        return ""
    return segments[-2]
