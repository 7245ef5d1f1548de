"""Circular dependency detection over a DependencyGraph."""

from __future__ import annotations

from collections.abc import Sequence

from code_deps.models import DependencyGraph


def is_rotation(a: Sequence[str], b: Sequence[str]) -> bool:
    """True if closed walks *a* and *b* describe the same loop.

    Both end with their first element; the closing element is ignored so
    ``[A, B, C, A]`` and ``[B, C, A, B]`` compare equal.
    """
    if len(a) != len(b):
        return False
    ring_a, ring_b = list(a[:-1]), list(b[:-1])
    n = len(ring_a)
    if n == 0:
        return True
    return any(
        all(ring_a[j] == ring_b[(i + j) % n] for j in range(n))
        for i in range(n)
    )


def find_circular_dependencies(graph: DependencyGraph) -> list[list[str]]:
    """Return every distinct dependency cycle in *graph*.

    Each node is tried as a start. The walk from a start keeps its own set
    of fully processed nodes; a node is marked only when its
    walk finishes, so reaching a node still on the current path closes
    a cycle. The
    result is not a minimal cycle basis: loops sharing edges are reported
    separately.

    A cycle is the path from the first occurrence of the repeated node,
    closed by that node again (``[A, B, A]``; a self-loop is ``[A, A]``).
    Rotations of an already reported cycle are discarded.
    """
    cycles: list[list[str]] = []

    def record(cycle: list[str]) -> None:
        if not any(is_rotation(known, cycle) for known in cycles):
            cycles.append(cycle)

    for start in graph.nodes:
        visited: set[str] = set()
        path: list[str] = []
        on_path: dict[str, int] = {}
        # (node, exiting)
        stack: list[tuple[str, bool]] = [(start, False)]

        while stack:
            node, exiting = stack.pop()
            if exiting:
                path.pop()
                del on_path[node]
                visited.add(node)
                continue
            if node in visited:
                continue
            if node in on_path:
                record(path[on_path[node]:] + [node])
                continue

            on_path[node] = len(path)
            path.append(node)
            stack.append((node, True))
            for target in reversed(list(graph.edges.get(node, {}))):
                stack.append((target, False))

    return cycles
