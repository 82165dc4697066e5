"""
Resource Descriptor Models

The fixed table of manifest units and its apply/teardown orderings.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from kubedeploy.constants import RESOURCE_TABLE, MANIFEST_SUFFIX


@dataclass(frozen=True)
class ResourceDescriptor:
    """One manifest unit, referenced by a stable name."""

    name: str
    apply_order: int
    kind: str = ""

    @property
    def manifest(self) -> str:
        """Manifest file name relative to the manifest directory."""
        return f"{self.name}{MANIFEST_SUFFIX}"


class ResourceSet:
    """
    Ordered, read-only set of resource descriptors.

    The apply sequence is sorted by apply_order. The teardown sequence is
    always the exact reverse of it.
    """

    def __init__(self, descriptors: Iterable[ResourceDescriptor]):
        ordered = sorted(descriptors, key=lambda d: d.apply_order)

        names = [d.name for d in ordered]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate resource names: {names}")

        orders = [d.apply_order for d in ordered]
        if len(set(orders)) != len(orders):
            raise ValueError(f"Duplicate apply orders: {orders}")

        self._descriptors: Tuple[ResourceDescriptor, ...] = tuple(ordered)

    @classmethod
    def from_table(cls, table: Iterable[tuple]) -> "ResourceSet":
        """Build a set from (name, apply_order, kind) rows."""
        return cls(ResourceDescriptor(name, order, kind) for name, order, kind in table)

    def apply_sequence(self) -> List[ResourceDescriptor]:
        return list(self._descriptors)

    def teardown_sequence(self) -> List[ResourceDescriptor]:
        return list(reversed(self._descriptors))

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self):
        return iter(self._descriptors)

    def __repr__(self) -> str:
        return f"ResourceSet({', '.join(d.name for d in self._descriptors)})"


DEFAULT_RESOURCES = ResourceSet.from_table(RESOURCE_TABLE)
