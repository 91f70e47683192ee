# utils.py — Pure helper functions (graph distances, group tallies)

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, Mapping, Optional, Sequence


def bfs_distances(adjacency: Mapping[str, Sequence[str]], source: str) -> Dict[str, int]:
    """Return the edge count of the shortest path from *source* to every reachable node."""
    distances: Dict[str, int] = {source: 0}
    queue = deque([source])
    while queue:
        current = queue.popleft()
        for nbr in adjacency.get(current, ()):
            if nbr not in distances:
                distances[nbr] = distances[current] + 1
                queue.append(nbr)
    return distances


def tally_groups(groups: Iterable[Optional[str]]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for group in groups:
        if group is not None:
            counts[group] = counts.get(group, 0) + 1
    return counts
