"""
Menu Path Enumerator

Depth-first enumeration of every path below each root menu, with cycle
detection. Each completed path is classified as valid (no node revisited)
or invalid (a node revisited, or the traversal came back to its root).

Algorithm:
- Roots are processed in the order they were added to the graph
- A path never contains the root, unless the root is reached again
- Expansion stops at a leaf, on a return to the root, or when the current
  node already occurs earlier in the path
- Each branch receives its own copy of the path

Sibling validity:
When a child about to be visited is already on the path, the validity flag
of the current level is cleared and stays cleared for every later sibling at
that level. Pass per_branch_validity=True to scope the flag to each branch
instead.
"""

import logging
from dataclasses import dataclass
from typing import Hashable, Iterator, Optional, Tuple

from menu_validator.classification import ClassificationResult
from menu_validator.graph import MenuGraph

logger = logging.getLogger(__name__)


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(frozen=True)
class PathState:
    """Traversal frame: where we are and how we got there."""
    root_id: Hashable
    current_id: Hashable
    path: Tuple[Hashable, ...]
    is_valid: bool


# =============================================================================
# Path Enumeration
# =============================================================================

def iter_paths(
    graph: MenuGraph,
    per_branch_validity: bool = False,
) -> Iterator[Tuple[Hashable, Tuple[Hashable, ...], bool]]:
    """
    Yield (root_id, path, is_valid) for every completed path.

    Uses an explicit stack instead of recursion so long menu chains cannot
    hit the interpreter recursion limit. Children are pushed in reverse so
    they are popped in their declared order, which keeps the output
    identical to a recursive depth-first walk.

    Args:
        graph: Populated MenuGraph (not modified)
        per_branch_validity: Scope invalidation to the offending branch
            instead of letting it carry over to later siblings

    Yields:
        Tuples of (root_id, path, is_valid) in depth-first completion order
    """
    for root_id in graph.roots:
        stack = [PathState(root_id=root_id, current_id=root_id, path=(), is_valid=True)]

        while stack:
            state = stack.pop()
            current_id = state.current_id
            children = graph.children_of(current_id)

            returned_to_root = current_id == root_id and bool(state.path)
            revisited = current_id in state.path[:-1]

            if children and not returned_to_root and not revisited:
                frames = []
                level_valid = state.is_valid
                for child_id in children:
                    seen = child_id in state.path
                    if per_branch_validity:
                        child_valid = state.is_valid and not seen
                    else:
                        if seen:
                            level_valid = False
                        child_valid = level_valid
                    frames.append(PathState(
                        root_id=root_id,
                        current_id=child_id,
                        path=state.path + (child_id,),
                        is_valid=child_valid,
                    ))
                stack.extend(reversed(frames))
                continue

            # Terminal node for this branch
            is_valid = state.is_valid and not returned_to_root and not revisited
            if not is_valid:
                logger.debug(f"Cycle closed at menu {current_id} below root {root_id}: {list(state.path)}")
            yield root_id, state.path, is_valid


def enumerate_paths(
    graph: MenuGraph,
    result: Optional[ClassificationResult] = None,
    per_branch_validity: bool = False,
) -> ClassificationResult:
    """
    Enumerate and classify all paths of all root menus.

    Args:
        graph: Populated MenuGraph
        result: Optional accumulator to append to (a new one by default)
        per_branch_validity: See iter_paths()

    Returns:
        ClassificationResult holding valid and invalid paths in discovery order
    """
    if result is None:
        result = ClassificationResult()

    for root_id, path, is_valid in iter_paths(graph, per_branch_validity=per_branch_validity):
        result.add(root_id, path, is_valid)

    logger.info(
        f"Classified {len(graph.roots)} root menus: "
        f"{result.valid_count} valid paths, {result.invalid_count} invalid paths"
    )
    return result
