"""Writing a derived molecular graph as SMILES."""
from collections import defaultdict
from typing import DefaultDict, Dict, List, Tuple, Union

from .grammar_rules import get_bond_from_num
from .molecule import Bond, MolecularAST, Ring


def ring_label(ring_id: int) -> str:
    """SMILES text of a ring-closure number, e.g. ``1``, ``%12``, ``%(123)``."""
    if ring_id < 10:
        return str(ring_id)
    elif ring_id < 100:
        return f"%{ring_id}"
    return f"%({ring_id})"


def ast_to_smiles(mol: MolecularAST) -> str:
    """Serializes a molecular graph into SMILES.

    The graph is traversed depth first from atom 0; atoms that are not
    connected to it through bonds are not written. Every neighbour but the
    last one opens a parenthesized branch. Each ring closure gets its own
    number, written with its bond symbol at both of its ends.

    Args:
        mol: the graph derived by the decoder.

    Returns:
        the SMILES string, empty for an empty graph.
    """
    if not mol.atoms:
        return ""

    ring_ids: Dict[Tuple[int, int], int] = {}
    incident_rings: DefaultDict[int, List[Ring]] = defaultdict(list)
    for ring in mol.rings:
        if ring.key not in ring_ids:
            ring_ids[ring.key] = len(ring_ids) + 1
        incident_rings[ring.source].append(ring)
        incident_rings[ring.target].append(ring)

    incident_bonds: DefaultDict[int, List[Bond]] = defaultdict(list)
    for bond in mol.bonds:
        incident_bonds[bond.source].append(bond)
        incident_bonds[bond.target].append(bond)

    visited = set()
    pieces = []
    # explicit stack instead of recursion so long chains cannot overflow;
    # plain strings are emitted as-is, tuples are (atom, parent, bond order)
    stack: List[Union[str, Tuple[int, int, int]]] = [(0, -1, 1)]

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            pieces.append(item)
            continue

        idx, parent, order = item
        visited.add(idx)
        if parent >= 0:
            pieces.append(get_bond_from_num(order))
        pieces.append(mol.atoms[idx].smiles_symbol)

        for ring in incident_rings[idx]:
            label = ring_label(ring_ids[ring.key])
            pieces.append(get_bond_from_num(ring.order) + label)

        children = []
        for bond in incident_bonds[idx]:
            nbr = bond.other_end(idx)
            if nbr != parent and nbr not in visited:
                children.append((nbr, bond.order))
        if not children:
            continue

        last_child, last_order = children[-1]
        stack.append((last_child, idx, last_order))
        for child, bond_order in reversed(children[:-1]):
            stack.append(")")
            stack.append((child, idx, bond_order))
            stack.append("(")

    return "".join(pieces)
