"""Grammar rules of the SELFIES derivation.

This module holds everything the decoder and the encoder agree upon:

    * the index alphabet, a fixed 16-symbol vocabulary used as the digits of
      the base-16 numerals that size branches and ring closures,
    * the pure state-transition functions for atoms, branches and rings,
    * the single classifier that turns a bracketed symbol into a token kind.

A derivation state is the number of bonds the most recently placed atom can
still make. ``0`` is the start state (no atom yet) and ``None`` marks an
exhausted (terminal) state.
"""
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .errors import GrammarError

# Elements the derivation accepts as atom symbols.
SUPPORTED_ELEMENTS = frozenset(
    {"C", "N", "O", "S", "P", "F", "Cl", "Br", "I", "B", "H"}
)

INDEX_ALPHABET = [
    "[C]",
    "[Ring1]",
    "[Ring2]",
    "[Branch1]",
    "[=Branch1]",
    "[#Branch1]",
    "[Branch2]",
    "[=Branch2]",
    "[#Branch2]",
    "[O]",
    "[N]",
    "[=N]",
    "[=C]",
    "[#C]",
    "[S]",
    "[P]",
]

# INDEX_CODE takes as a key a SELFIES symbol, and its corresponding value
# is the position of the key in INDEX_ALPHABET.
INDEX_CODE: Dict[str, int] = {c: i for i, c in enumerate(INDEX_ALPHABET)}

_BRANCH_PATTERN = re.compile(r"^\[([=#]?)Branch([1-3])\]$")
_RING_PATTERN = re.compile(r"^\[([=#]?)Ring([1-3])\]$")
_STEREO_RING_PATTERN = re.compile(r"^\[([-\\/])([-\\/])Ring([1-3])\]$")
_ELEMENT_PATTERN = re.compile(r"[A-Z][a-z]?")


@dataclass(frozen=True)
class AtomToken:
    element: str
    bond_order: int = 1
    stereo: Optional[str] = None


@dataclass(frozen=True)
class BranchToken:
    order: int
    length: int


@dataclass(frozen=True)
class RingToken:
    order: int
    length: int
    stereo: Optional[str] = None


@dataclass(frozen=True)
class NopToken:
    symbol: str


TokenKind = Union[AtomToken, BranchToken, RingToken, NopToken]


def get_num_from_bond(bond_symbol: str) -> int:
    """Retrieves the bond multiplicity from a SMILES bond symbol.

    Args:
        bond_symbol: a SMILES bond symbol (``''``, ``'='``, ``'#'``, ...).

    Returns:
        the multiplicity of ``bond_symbol``, 1 if it is not recognized.
    """
    if bond_symbol == "=":
        return 2
    elif bond_symbol == "#":
        return 3
    else:
        return 1


def get_bond_from_num(n: int) -> str:
    """Returns the SMILES symbol of a bond with multiplicity ``n`` (1, 2 or 3)."""
    return ("", "=", "#")[n - 1]


def process_branch_symbol(symbol: str) -> Optional[Tuple[int, int]]:
    """Parses a Branch symbol.

    Args:
        symbol: a SELFIES symbol, e.g. ``[=Branch2]``.

    Returns:
        a tuple of (1) the bond order of the branch and (2) the number of
        index symbols that follow it, or None if ``symbol`` is not a Branch.
    """
    match = _BRANCH_PATTERN.match(symbol)
    if match is None:
        return None
    bond, length = match.groups()
    return get_num_from_bond(bond), int(length)


def process_ring_symbol(symbol: str) -> Optional[Tuple[int, int, Optional[str]]]:
    """Parses a Ring symbol.

    Besides the bond-prefixed forms (``[Ring1]``, ``[=Ring2]``) a ring may
    carry a two character stereo prefix, e.g. ``[-/Ring1]``, in which case
    the ring bond is single.

    Args:
        symbol: a SELFIES symbol.

    Returns:
        a tuple of (1) the bond order, (2) the number of index symbols that
        follow it and (3) the stereo prefix (or None), or None if ``symbol``
        is not a Ring.
    """
    match = _RING_PATTERN.match(symbol)
    if match is not None:
        bond, length = match.groups()
        return get_num_from_bond(bond), int(length), None

    match = _STEREO_RING_PATTERN.match(symbol)
    if match is not None:
        left, right, length = match.groups()
        return 1, int(length), left + right

    return None


def parse_atom_symbol(symbol: str) -> Optional[AtomToken]:
    """Parses an atom symbol such as ``[C]``, ``[=O]`` or ``[C@@H]``.

    A ``/`` or ``\\`` prefix is read as a single bond; the marker itself is
    dropped. Content holding a ``@`` is a stereo atom: the full content is kept
    as the stereo descriptor and the element is its leading letter run.

    Args:
        symbol: a bracketed SELFIES symbol.

    Returns:
        the parsed atom, or None if the element is not supported.
    """
    content = symbol[1:-1]
    bond_order = 1
    if content[:1] in ("=", "#", "/", "\\"):
        bond_order = get_num_from_bond(content[0])
        content = content[1:]

    stereo = None
    element = content
    if "@" in content:
        stereo = content
        match = _ELEMENT_PATTERN.match(content)
        element = match.group(0) if match else ""

    if element not in SUPPORTED_ELEMENTS:
        return None
    return AtomToken(element=element, bond_order=bond_order, stereo=stereo)


def classify_symbol(symbol: str) -> TokenKind:
    """Classifies a SELFIES symbol into exactly one token kind.

    Anything that is neither a Branch, a Ring nor a supported atom (``[nop]``,
    unknown elements, stray text) becomes a ``NopToken``.
    """
    if len(symbol) < 3 or symbol[0] != "[" or symbol[-1] != "]":
        return NopToken(symbol)

    branch = process_branch_symbol(symbol)
    if branch is not None:
        return BranchToken(*branch)

    ring = process_ring_symbol(symbol)
    if ring is not None:
        return RingToken(*ring)

    atom = parse_atom_symbol(symbol)
    if atom is not None:
        return atom

    return NopToken(symbol)


def next_atom_state(
    requested_order: int, capacity: int, state: int
) -> Tuple[int, Optional[int]]:
    """Enforces the grammar rules for atom symbols.

    Args:
        requested_order: the bond order carried by the atom symbol.
        capacity: the bonding capacity of the atom.
        state: the current derivation state.

    Returns:
        a tuple of (1) the order of the bond to the previous atom (0 for the
        first atom) and (2) the next derivation state.
    """
    if state == 0:
        actual_order = 0
    else:
        actual_order = min(requested_order, state, capacity)

    bonds_left = capacity - actual_order
    next_state = bonds_left if bonds_left > 0 else None
    return actual_order, next_state


def next_branch_state(branch_type: int, state: Optional[int]) -> Tuple[int, int]:
    """Enforces the grammar rules for Branch symbols.

    A branch needs one bond for itself and one to continue the main chain,
    so it can only be opened from a state greater than 1.

    Args:
        branch_type: the bond order of the branch symbol.
        state: the current derivation state.

    Returns:
        a tuple of (1) the state the branch derivation starts in and (2) the
        state of the main chain after the branch.
    """
    if state is None or state <= 1:
        raise GrammarError(f"branch requires a state > 1, got {state}")

    branch_init_state = min(state - 1, branch_type)
    next_state = state - branch_init_state
    return branch_init_state, next_state


def next_ring_state(ring_type: int, state: Optional[int]) -> Tuple[int, Optional[int]]:
    """Enforces the grammar rules for Ring symbols.

    Args:
        ring_type: the bond order of the ring symbol.
        state: the current derivation state.

    Returns:
        a tuple of (1) the bond order of the ring closure and (2) the next
        derivation state.
    """
    if state is None or state <= 0:
        raise GrammarError(f"ring requires a state > 0, got {state}")

    bond_order = min(ring_type, state)
    bonds_left = state - bond_order
    next_state = bonds_left if bonds_left > 0 else None
    return bond_order, next_state


def get_index_from_selfies(symbols: Iterable[str]) -> int:
    """Computes an index from a list of SELFIES symbols.

    The symbols are read as a base 16 number, most significant first, where
    the value of each symbol is its position in ``INDEX_ALPHABET``. Unknown
    symbols are given value 0.

    Args:
        symbols: a list of SELFIES symbols.

    Returns:
        the corresponding index.
    """
    base = len(INDEX_ALPHABET)
    index = 0
    for symbol in symbols:
        index = index * base + INDEX_CODE.get(symbol, 0)
    return index


def get_selfies_from_index(index: int) -> List[str]:
    """Converts a non-negative integer into the SELFIES symbols that, if passed
    into ``get_index_from_selfies`` in that order, produce it.

    Args:
        index: a non-negative integer.

    Returns:
        a list of index symbols representing ``index`` in base 16.
    """
    if index < 0:
        raise ValueError(f"index must be non-negative, got {index}")
    if index == 0:
        return [INDEX_ALPHABET[0]]

    symbols = []
    base = len(INDEX_ALPHABET)
    while index:
        index, remainder = divmod(index, base)
        symbols.append(INDEX_ALPHABET[remainder])
    return symbols[::-1]
