"""File sequencing strategies.

Test files are merged in module sequence order. The ordering rules belong
to the application, so the resolver delegates to an injected sorter.
"""

from pathlib import Path
from typing import List, Protocol, Sequence


class SequenceSorter(Protocol):
    def sort(self, files: Sequence[Path]) -> List[Path]: ...


class PassthroughSequenceSorter:
    """Keeps files in the order they were discovered."""

    def sort(self, files: Sequence[Path]) -> List[Path]:
        return list(files)
