"""Chain migration guides into a path between two versions.

The guide set is a directed multigraph: versions are nodes, each guide is an
edge from ``from_version`` to ``to_version``.

Path search (deterministic predicate):
1. A guide going exactly from -> to is returned alone, even if a multi-hop
   path also exists.
2. Otherwise walk forward greedily: from the current version take the guide
   with the highest ``to_version`` not beyond the target (ties go to the
   guide registered last).
3. The walk succeeds only if it lands exactly on the target; any dead end
   yields an empty path, even when a different first hop would have worked.
"""

import logging
from typing import List, Optional, Sequence

from packaging.version import Version

from oxcompat._internal.reporting.markdown import render_path
from .migration import MigrationGuide
from .versioning import parse_version

logger = logging.getLogger(__name__)


class MigrationPlan:
    """An unordered collection of migration guides."""

    def __init__(self, guides: Optional[Sequence[MigrationGuide]] = None):
        self.guides: List[MigrationGuide] = list(guides or [])

    def add_guide(self, guide: MigrationGuide) -> None:
        """Register a guide. No deduplication, no direction check."""
        self.guides.append(guide)

    def find_path(self, from_version, to_version) -> List[MigrationGuide]:
        """Find a chain of guides from ``from_version`` to ``to_version``.

        Returns an empty list when no path is found.
        """
        start: Version = parse_version(from_version)
        target: Version = parse_version(to_version)

        for guide in self.guides:
            if guide.from_version == start and guide.to_version == target:
                return [guide]

        path: List[MigrationGuide] = []
        current = start
        # Each hop consumes a guide; more hops than guides means a guide did not advance
        while current < target and len(path) < len(self.guides):
            next_guide = self._farthest_hop(current, target)
            if next_guide is None:
                logger.debug("Migration path %s -> %s dead-ends at %s", start, target, current)
                break
            path.append(next_guide)
            current = next_guide.to_version

        if current == target:
            return path
        return []

    def _farthest_hop(self, current: Version, target: Version) -> Optional[MigrationGuide]:
        best: Optional[MigrationGuide] = None
        for guide in self.guides:
            if guide.from_version != current or guide.to_version > target:
                continue
            if best is None or guide.to_version >= best.to_version:
                best = guide
        return best

    def total_time(self, path: Sequence[MigrationGuide]) -> Optional[int]:
        """Sum of estimated minutes, or None unless every guide declares a time."""
        if any(guide.estimated_time is None for guide in path):
            return None
        return sum(guide.estimated_time for guide in path)

    def total_steps(self, path: Sequence[MigrationGuide]) -> int:
        return sum(guide.step_count() for guide in path)

    def path_to_markdown(self, path: Sequence[MigrationGuide]) -> str:
        """Render a path: overview list, then each guide separated by rules."""
        return render_path(path)
