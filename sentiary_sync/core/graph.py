"""Ordering language overrides by their fallback dependencies."""

from collections import deque
from collections.abc import Mapping

from ..errors import CycleError
from ..models.config import LanguageOverride


def resolve_override_order(overrides: Mapping[str, LanguageOverride]) -> list[str]:
    """Topologically sort overrides so every fallback comes before its dependents.

    Uses Kahn's algorithm over edges ``fallback_to -> name``. Only overrides
    with ``fetch`` enabled and a fallback take part. Base languages appear in
    the graph as fallback targets but are dropped from the result.

    Args:
        overrides: Declared overrides keyed by name

    Returns:
        Override names in processing order

    Raises:
        CycleError: If the fallbacks form a cycle
    """
    graph: dict[str, list[str]] = {}
    in_degrees: dict[str, int] = {}

    for override in overrides.values():
        if not override.fetch or not override.fallback_to:
            continue
        graph.setdefault(override.fallback_to, []).append(override.name)
        in_degrees.setdefault(override.fallback_to, 0)
        in_degrees[override.name] = in_degrees.get(override.name, 0) + 1

    queue = deque(lang for lang, degree in in_degrees.items() if degree == 0)

    ordered: list[str] = []
    while queue:
        lang = queue.popleft()
        ordered.append(lang)

        for neighbor in graph.get(lang, []):
            in_degrees[neighbor] -= 1
            if in_degrees[neighbor] == 0:
                queue.append(neighbor)

    if len(ordered) != len(in_degrees):
        remaining = sorted(lang for lang, degree in in_degrees.items() if degree > 0)
        raise CycleError(remaining)

    # Overrides without a fallback only appear as roots
    return [
        lang
        for lang in ordered
        if lang in overrides and overrides[lang].fetch and overrides[lang].fallback_to
    ]
