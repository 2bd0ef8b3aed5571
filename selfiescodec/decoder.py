"""SELFIES to SMILES translation.

The decoder runs the SELFIES derivation over the classified symbols of the
input, appending atoms, bonds and ring closures to a ``MolecularAST`` owned
by the call, and hands the result to the serializer. Every token sequence
derives to some molecule: malformed or misplaced symbols are skipped, and the
derivation halts once the bonding capacity of the chain is exhausted.
"""
import json
import logging
from typing import List, Mapping, Optional, Sequence

from .constraints import ConstraintsLike, get_bonding_capacity, resolve_constraints
from .grammar_rules import (
    AtomToken,
    BranchToken,
    NopToken,
    RingToken,
    TokenKind,
    classify_symbol,
    get_index_from_selfies,
    next_atom_state,
    next_branch_state,
    next_ring_state,
)
from .molecule import MolecularAST
from .serializer import ast_to_smiles
from .tokenizer import split_selfies

logger = logging.getLogger(__name__)

NOP_SYMBOL = "[nop]"


def decode(selfies: str, constraints: ConstraintsLike = None) -> str:
    """Translates a SELFIES into a SMILES.

    Args:
        selfies: the SELFIES to be translated.
        constraints: bonding capacities to derive with. Either None (the
            currently configured table), a preset name (``default``,
            ``octet_rule``, ``hypervalent``) or an explicit table.

    Returns:
        the SMILES translation of ``selfies``.

    Example:
        >>> decode("[C][=C][F]")
        'C=CF'
    """
    return ast_to_smiles(decode_to_ast(selfies, constraints))


def decode_to_ast(selfies: str, constraints: ConstraintsLike = None) -> MolecularAST:
    """Derives the molecular graph of a SELFIES without serializing it.

    Args:
        selfies: the SELFIES to be derived.
        constraints: see :func:`decode`.

    Returns:
        the atoms, bonds and ring closures of the derived molecule.
    """
    if not isinstance(selfies, str):
        raise TypeError(f"SELFIES must be a string, got {type(selfies).__name__}")

    capacities = resolve_constraints(constraints)
    symbols = list(split_selfies(selfies))
    kinds = [classify_symbol(symbol) for symbol in symbols]

    mol = MolecularAST()
    _derive(symbols, kinds, capacities, mol)
    return mol


def dump_ast(
    selfies: str, constraints: ConstraintsLike = None, indent: Optional[int] = None
) -> str:
    """Returns the derived molecular graph of a SELFIES as a JSON string."""
    return json.dumps(decode_to_ast(selfies, constraints).as_dict(), indent=indent)


def _add_atom(
    mol: MolecularAST, token: AtomToken, capacities: Mapping[str, int]
) -> int:
    capacity = get_bonding_capacity(token.element, 0, capacities)
    return mol.add_atom(token.element, capacity, token.stereo)


def _skip(kind: TokenKind, position: int) -> None:
    if isinstance(kind, NopToken) and kind.symbol == NOP_SYMBOL:
        return
    logger.debug(f"Skipping {kind} at position {position}")


def _derive(
    symbols: Sequence[str],
    kinds: List[TokenKind],
    capacities: Mapping[str, int],
    mol: MolecularAST,
) -> None:
    """Main derivation loop.

    Args:
        symbols: the raw symbols, needed to read index values.
        kinds: the classified symbols, same length as ``symbols``.
        capacities: snapshot of the bonding capacities.
        mol: the arena the derived atoms and edges are appended to.
    """
    state = 0
    prev_idx = None
    i = 0

    while i < len(kinds):
        kind = kinds[i]
        i += 1

        if isinstance(kind, NopToken):
            _skip(kind, i - 1)

        elif isinstance(kind, BranchToken):
            if state <= 1:
                _skip(kind, i - 1)
                continue
            if i + kind.length > len(kinds):  # index symbols cut off
                break

            Q = get_index_from_selfies(symbols[i : i + kind.length])
            i += kind.length

            branch_init_state, next_state = next_branch_state(kind.order, state)
            i = _derive_branch(
                kinds, i, Q + 1, branch_init_state, prev_idx, capacities, mol
            )
            state = next_state

        elif isinstance(kind, RingToken):
            if state == 0:
                _skip(kind, i - 1)
                continue

            bond_order, next_state = next_ring_state(kind.order, state)

            if i + kind.length > len(kinds):  # index symbols cut off
                if mol.bonds:
                    mol.increase_order(mol.bonds[-1], bond_order)
                break

            Q = get_index_from_selfies(symbols[i : i + kind.length])
            i += kind.length

            target_idx = max(0, prev_idx - (Q + 1))
            if target_idx != prev_idx:  # a ring to the same atom places nothing
                _close_ring(mol, target_idx, prev_idx, bond_order)

            # the ring consumes its full order even when fewer bonds fit
            state = next_state
            if state is None:
                break

        else:
            idx = _add_atom(mol, kind, capacities)
            bond_order, state = next_atom_state(
                kind.bond_order, mol.atoms[idx].capacity, state
            )
            if bond_order > 0 and prev_idx is not None:
                mol.add_bond(prev_idx, idx, bond_order)
            prev_idx = idx

            if state is None:  # valence saturated
                break


def _derive_branch(
    kinds: List[TokenKind],
    i: int,
    max_derive: int,
    init_state: int,
    root_idx: int,
    capacities: Mapping[str, int],
    mol: MolecularAST,
) -> int:
    """Derives the atoms of a branch rooted at ``root_idx``.

    Places at most ``max_derive`` atoms. Branch and Ring symbols found inside
    the branch body are skipped, not derived.

    Returns:
        the position of the first symbol the branch did not consume.
    """
    state = init_state
    prev_idx = root_idx
    n_derived = 0

    while i < len(kinds) and n_derived < max_derive and state is not None:
        kind = kinds[i]
        i += 1

        if not isinstance(kind, AtomToken):
            _skip(kind, i - 1)
            continue

        idx = _add_atom(mol, kind, capacities)
        bond_order, state = next_atom_state(
            kind.bond_order, mol.atoms[idx].capacity, state
        )
        mol.add_bond(prev_idx, idx, bond_order)
        prev_idx = idx
        n_derived += 1

    return i


def _close_ring(mol: MolecularAST, left_idx: int, right_idx: int, order: int) -> int:
    """Closes a ring between two derived atoms.

    A ring landing on an already bonded pair raises the order of that bond,
    e.g. ``[C][C][Ring1][C]`` becomes ``C=C``. A ring landing on a pair that
    is already ring-closed raises the order of that ring.

    Returns:
        the bond order actually placed.
    """
    bond = mol.find_bond(left_idx, right_idx)
    if bond is not None:
        return mol.increase_order(bond, order)

    ring = mol.find_ring(left_idx, right_idx)
    if ring is not None:
        return mol.increase_order(ring, order)

    order = min(order, mol.free_capacity(left_idx), mol.free_capacity(right_idx))
    if order > 0:
        mol.add_ring(left_idx, right_idx, order)
    return order
