"""
Ambiguity policy for fan-out points in the resolution chain.

Every fan-out must narrow down to exactly one candidate.
"""
from typing import Callable, Optional, Sequence, TypeVar

from ..exceptions import AmbiguousMatchError

T = TypeVar("T")


class AmbiguityPolicy:
    """
    Selects exactly one of N candidates.

    - no candidates: None (not found, not an error)
    - one candidate: that candidate
    - several: AmbiguousMatchError listing every candidate's label
    """

    def __init__(self, kind: str, summary: Optional[str] = None):
        """
        :param kind: Plural resource kind used in messages (e.g. "forwarding rules")
        :param summary: Diagnostic summary on ambiguity, defaults to "Multiple matching {kind} found"
        """
        self.kind = kind
        self.summary = summary or f"Multiple matching {kind} found"

    def select(
        self,
        candidates: Sequence[T],
        label: Callable[[T], str],
    ) -> Optional[T]:
        """
        Select the sole candidate.

        :param candidates: Candidates in encounter order
        :param label: Returns the human-readable label of a candidate
        :return: The only candidate, or None when there are none
        :raises AmbiguousMatchError: If two or more candidates are given
        """
        if not candidates:
            return None

        if len(candidates) > 1:
            detail = f"The following {self.kind} matched:\n\n"
            for candidate in candidates:
                detail += f"  - {label(candidate)}\n"
            raise AmbiguousMatchError(self.summary, detail)

        return candidates[0]
