"""
Classification result for menu paths.

Append-only accumulation of root-to-terminal paths into a valid and an
invalid group, kept in the order the enumerator emitted them.
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, List, Tuple


@dataclass(frozen=True)
class MenuPath:
    """One completed path from a root menu (the root itself excluded)."""
    root_id: Hashable
    path: Tuple[Hashable, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {'root_id': self.root_id, 'children': list(self.path)}


class ClassificationResult:
    """
    Valid and invalid menu paths in discovery order.

    No sorting, merging or de-duplication is performed: a root with three
    completed paths appears three times.
    """

    def __init__(self):
        self._valid: List[MenuPath] = []
        self._invalid: List[MenuPath] = []

    def add(self, root_id: Hashable, path: Iterable[Hashable], is_valid: bool) -> MenuPath:
        """
        Record one completed path.

        Args:
            root_id: Root menu the path started from
            path: Node ids visited after the root
            is_valid: Whether the path is acyclic

        Returns:
            The stored MenuPath
        """
        entry = MenuPath(root_id=root_id, path=tuple(path))
        if is_valid:
            self._valid.append(entry)
        else:
            self._invalid.append(entry)
        return entry

    @property
    def valid(self) -> Tuple[MenuPath, ...]:
        """Valid paths, read-only view."""
        return tuple(self._valid)

    @property
    def invalid(self) -> Tuple[MenuPath, ...]:
        """Invalid paths, read-only view."""
        return tuple(self._invalid)

    @property
    def valid_count(self) -> int:
        return len(self._valid)

    @property
    def invalid_count(self) -> int:
        return len(self._invalid)

    def roots(self) -> Dict[str, List[Hashable]]:
        """
        Summarize which roots produced valid and invalid paths.

        A root is listed under 'invalid_roots' as soon as one of its paths is
        invalid; 'valid_roots' holds roots whose paths are all valid. Order
        follows first appearance.
        """
        invalid_roots = list(dict.fromkeys(entry.root_id for entry in self._invalid))
        invalid_set = set(invalid_roots)
        valid_roots = [
            root_id for root_id in dict.fromkeys(entry.root_id for entry in self._valid)
            if root_id not in invalid_set
        ]
        return {'valid_roots': valid_roots, 'invalid_roots': invalid_roots}

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            'valid_menus': [entry.to_dict() for entry in self._valid],
            'invalid_menus': [entry.to_dict() for entry in self._invalid],
        }

    def __len__(self) -> int:
        return len(self._valid) + len(self._invalid)

    def __repr__(self) -> str:
        return f"ClassificationResult(valid={self.valid_count}, invalid={self.invalid_count})"
