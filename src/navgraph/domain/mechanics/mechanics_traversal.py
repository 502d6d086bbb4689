from collections import deque
from collections.abc import Iterable

from navgraph.domain.entities.campus import Building, Floor
from navgraph.domain.results import Graph


def shortest_paths(start: str, adjacency: Graph) -> dict[str, int]:
    """BFS hop counts from start; unreachable nodes are absent."""
    hops = {start: 0}
    frontier = deque([start])
    while frontier:
        u = frontier.popleft()
        for v in adjacency.get(u, ()):
            if v not in hops:
                hops[v] = hops[u] + 1
                frontier.append(v)
    return hops


def all_pairs_hops(nodes: Iterable[str], adjacency: Graph) -> dict[str, dict[str, int]]:
    return {n: shortest_paths(n, adjacency) for n in nodes}


def root_floor(building: Building) -> Floor | None:
    for f in building.floors:
        if f.level == 0:
            return f
    return building.floors[0] if building.floors else None


def isolated_floors(building: Building, adjacency: Graph) -> list[Floor]:
    """Floors not reachable from the ground floor (or the first floor when there is none)."""
    root = root_floor(building)
    if root is None:
        return []
    seen = set()
    stack = [root.id]
    while stack:
        u = stack.pop()
        if u in seen:
            continue
        seen.add(u)
        stack.extend(v for v in adjacency.get(u, ()) if v not in seen)
    return [f for f in building.floors if f.id not in seen]


def reconstruct_path(start: str, end: str, adjacency: Graph) -> list[str]:
    # Frontier holds full prefixes; first path discovered in adjacency order wins.
    if start == end:
        return [start]
    seen = {start}
    frontier = deque([[start]])
    while frontier:
        path = frontier.popleft()
        for v in adjacency.get(path[-1], ()):
            if v in seen:
                continue
            if v == end:
                return path + [v]
            seen.add(v)
            frontier.append(path + [v])
    return []


def connected_components(adjacency: Graph) -> list[list[str]]:
    """Components of the graph read as undirected, in first-seen order."""
    undirected: dict[str, set[str]] = {n: set() for n in adjacency}
    for u, vs in adjacency.items():
        for v in vs:
            undirected.setdefault(v, set()).add(u)
            undirected[u].add(v)
    seen: set[str] = set()
    components = []
    for n in undirected:
        if n in seen:
            continue
        comp, stack = [], [n]
        while stack:
            u = stack.pop()
            if u in seen:
                continue
            seen.add(u)
            comp.append(u)
            stack.extend(undirected[u] - seen)
        components.append(comp)
    return components
