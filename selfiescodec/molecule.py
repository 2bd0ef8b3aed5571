"""Append-only molecular graph built by a single decode call."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

MAX_BOND_ORDER = 3


@dataclass(frozen=True)
class Atom:
    element: str
    capacity: int
    stereo: Optional[str] = None
    index: int = 0

    @property
    def smiles_symbol(self) -> str:
        """The SMILES text of the atom, bracketed for stereo atoms."""
        if self.stereo is not None:
            return f"[{self.stereo}]"
        return self.element

    def as_dict(self) -> Dict[str, Any]:
        return {
            "element": self.element,
            "capacity": self.capacity,
            "stereo": self.stereo,
        }


@dataclass
class Edge:
    source: int
    target: int
    order: int = 1

    @property
    def key(self) -> Tuple[int, int]:
        return _pair(self.source, self.target)

    def other_end(self, idx: int) -> Optional[int]:
        if idx == self.source:
            return self.target
        elif idx == self.target:
            return self.source
        return None

    def as_dict(self) -> Dict[str, int]:
        return {"from": self.source, "to": self.target, "order": self.order}


class Bond(Edge):
    """An edge between atoms that are adjacent in the derivation."""


class Ring(Edge):
    """A ring-closure edge between non-adjacent atoms."""


def _pair(idx_a: int, idx_b: int) -> Tuple[int, int]:
    return (idx_a, idx_b) if idx_a <= idx_b else (idx_b, idx_a)


@dataclass
class MolecularAST:
    """Atoms, bonds and ring closures of a decoded SELFIES.

    Atom indices are emission order and never change. Edges only ever gain
    order, and every placement goes through the free-capacity bookkeeping so
    that no atom ends up with more bonds than its capacity.
    """

    atoms: List[Atom] = field(default_factory=list)
    bonds: List[Bond] = field(default_factory=list)
    rings: List[Ring] = field(default_factory=list)
    _free: List[int] = field(default_factory=list, repr=False)
    _bond_lookup: Dict[Tuple[int, int], Bond] = field(default_factory=dict, repr=False)
    _ring_lookup: Dict[Tuple[int, int], Ring] = field(default_factory=dict, repr=False)

    def add_atom(
        self, element: str, capacity: int, stereo: Optional[str] = None
    ) -> int:
        idx = len(self.atoms)
        self.atoms.append(Atom(element, capacity, stereo, idx))
        self._free.append(capacity)
        return idx

    def free_capacity(self, idx: int) -> int:
        return self._free[idx]

    def add_bond(self, idx_a: int, idx_b: int, order: int) -> Bond:
        bond = Bond(idx_a, idx_b, order)
        self.bonds.append(bond)
        self._bond_lookup[bond.key] = bond
        self._consume(idx_a, idx_b, order)
        return bond

    def add_ring(self, idx_a: int, idx_b: int, order: int) -> Ring:
        ring = Ring(idx_a, idx_b, order)
        self.rings.append(ring)
        self._ring_lookup[ring.key] = ring
        self._consume(idx_a, idx_b, order)
        return ring

    def find_bond(self, idx_a: int, idx_b: int) -> Optional[Bond]:
        return self._bond_lookup.get(_pair(idx_a, idx_b))

    def find_ring(self, idx_a: int, idx_b: int) -> Optional[Ring]:
        return self._ring_lookup.get(_pair(idx_a, idx_b))

    def increase_order(self, edge: Edge, order: int) -> int:
        """Raises the order of an existing edge.

        The increase is capped at a triple bond and by the free capacity of
        both ends.

        Returns:
            the order actually added.
        """
        added = min(
            order,
            MAX_BOND_ORDER - edge.order,
            self._free[edge.source],
            self._free[edge.target],
        )
        if added > 0:
            edge.order += added
            self._consume(edge.source, edge.target, added)
        return added

    def _consume(self, idx_a: int, idx_b: int, order: int) -> None:
        self._free[idx_a] -= order
        self._free[idx_b] -= order

    def as_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "atoms": [atom.as_dict() for atom in self.atoms],
            "bonds": [bond.as_dict() for bond in self.bonds],
            "rings": [ring.as_dict() for ring in self.rings],
        }
