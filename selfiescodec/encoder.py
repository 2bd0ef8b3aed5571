"""SMILES to SELFIES translation."""
import logging
from typing import Dict, List, Optional, Tuple

from .errors import EncodeError
from .grammar_rules import get_selfies_from_index

logger = logging.getLogger(__name__)

# Two letter elements written outside of brackets. Element pairs that could
# also be read as an atom followed by an aromatic atom (Sc, Cs, Co, Sn, ...)
# are deliberately absent.
TWO_LETTER_ELEMENTS = frozenset(
    {
        "Cl",
        "Br",
        "Si",
        "Se",
        "Li",
        "Na",
        "Mg",
        "Al",
        "Ca",
        "Ti",
        "Cr",
        "Mn",
        "Fe",
        "Ni",
        "Cu",
        "Zn",
        "Ge",
        "As",
        "Te",
        "Ag",
        "Au",
        "Pt",
        "Hg",
        "Xe",
        "Kr",
        "Ar",
        "Ne",
        "He",
    }
)

AROMATIC_ELEMENTS = frozenset({"b", "c", "n", "o", "p", "s"})

BOND_SYMBOLS = ("-", "=", "#", "/", "\\")

# Branch3 and Ring3 are followed by at most three index symbols.
MAX_INDEX_SYMBOLS = 3


def encode(smiles: str) -> str:
    """Translates a SMILES into a SELFIES.

    The translation preserves the atom and branch order of the input. Only
    the organic-subset style of SMILES is covered: bracket atoms keep their
    element and ``@``/``@@`` chirality while isotopes, charges and hydrogen
    counts are dropped, and aromatic atoms are kekulized by alternating
    single and double bonds, which is only right for simple even rings.

    Args:
        smiles: the SMILES to be translated.

    Returns:
        the SELFIES translation of ``smiles``.

    Raises:
        EncodeError: on an empty string, unmatched parentheses, a dangling
            bond symbol, an unclosed bracket or ring, or an unrecognized
            character.

    Example:
        >>> encode("C=CF")
        '[C][=C][F]'
    """
    if not isinstance(smiles, str):
        raise TypeError(f"SMILES must be a string, got {type(smiles).__name__}")
    if not smiles:
        raise EncodeError("Empty SMILES string", smiles)

    # rings[ring_id] = (index of the opening atom, bond symbol at the opening)
    rings: Dict[int, Tuple[int, str]] = {}
    # a simple mutable counter to track which atom was the i-th derived atom
    counter = [0]

    tokens = _translate_smiles(smiles, smiles, rings, counter, None)
    if rings:
        raise EncodeError(
            f"Unclosed ring bond(s) {', '.join(map(str, sorted(rings)))}", smiles
        )
    return "".join(tokens)


def _translate_smiles(
    smiles: str,
    source: str,
    rings: Dict[int, Tuple[int, str]],
    counter: List[int],
    root_idx: Optional[int],
) -> List[str]:
    """Recursive helper for ``encode``.

    Scans one nesting level of a SMILES; parenthesized branches are
    translated by recursion on their content.

    Args:
        smiles: the SMILES fragment of this nesting level.
        source: the complete SMILES, for error messages.
        rings: See ``rings`` in ``encode``.
        counter: a one-element list that serves as a mutable atom counter.
        root_idx: the atom this fragment is attached to, None at top level.

    Returns:
        the SELFIES symbols of the fragment.
    """
    tokens: List[str] = []
    prev_idx = root_idx
    aromatic_count = 0
    bond = ""
    i = 0

    while i < len(smiles):
        char = smiles[i]

        if char in BOND_SYMBOLS:
            if bond:
                raise EncodeError(
                    f"Invalid SMILES: consecutive bonds '{bond}{char}'", source
                )
            if i + 1 >= len(smiles):
                raise EncodeError("Invalid SMILES: bond symbol at end", source)
            nxt = smiles[i + 1]
            if not (nxt.isalpha() or nxt in "[%" or "0" <= nxt <= "9"):
                raise EncodeError(
                    f"Invalid SMILES: unexpected character after {char}: {nxt}", source
                )
            bond = char
            i += 1
            continue

        if "0" <= char <= "9" or char == "%":
            ring_id, i = _read_ring_id(smiles, i, source)
            if prev_idx is None:
                raise EncodeError("Invalid SMILES: ring bond before any atom", source)
            if ring_id in rings:
                tokens.extend(_close_ring(rings.pop(ring_id), prev_idx, bond, source))
            else:
                rings[ring_id] = (prev_idx, bond)

        elif char == "(":
            if prev_idx is None:
                raise EncodeError("Invalid SMILES: branch before any atom", source)
            content, end = _extract_branch(smiles, i, source)
            if not content:
                raise EncodeError("Invalid SMILES: empty branch", source)

            n_atoms = counter[0]
            branch = _translate_smiles(content, source, rings, counter, prev_idx)
            if counter[0] == n_atoms:
                raise EncodeError("Invalid SMILES: branch without atoms", source)
            index_symbols = _index_symbols(len(branch) - 1, source)
            branch_bond = content[0] if content[0] in ("=", "#") else ""

            tokens.append(f"[{branch_bond}Branch{len(index_symbols)}]")
            tokens.extend(index_symbols)
            tokens.extend(branch)
            i = end + 1

        elif char == ")":
            raise EncodeError("Unmatched parenthesis in SMILES", source)

        elif char == "[":
            atom, i = _read_bracket_atom(smiles, i, source)
            tokens.append(f"[{_atom_bond(bond)}{atom}]")
            prev_idx = _next_atom(counter)

        elif "A" <= char <= "Z":
            if smiles[i : i + 2] in TWO_LETTER_ELEMENTS:
                element = smiles[i : i + 2]
            else:
                element = char
            tokens.append(f"[{_atom_bond(bond)}{element}]")
            prev_idx = _next_atom(counter)
            i += len(element)

        elif char in AROMATIC_ELEMENTS:
            if bond in ("=", "#"):
                tokens.append(f"[{bond}{char.upper()}]")
            else:
                # heuristic kekulization: alternate single and double bonds
                parity_bond = "=" if aromatic_count % 2 else ""
                tokens.append(f"[{parity_bond}{char.upper()}]")
                aromatic_count += 1
            prev_idx = _next_atom(counter)
            i += 1

        else:
            raise EncodeError(f"Invalid SMILES character: {char}", source)

        bond = ""

    return tokens


def _next_atom(counter: List[int]) -> int:
    idx = counter[0]
    counter[0] += 1
    return idx


def _atom_bond(bond: str) -> str:
    # explicit single bonds are implied
    return "" if bond == "-" else bond


def _index_symbols(index: int, source: str) -> List[str]:
    symbols = get_selfies_from_index(index)
    if len(symbols) > MAX_INDEX_SYMBOLS:
        raise EncodeError(f"Branch or ring of length {index + 1} is too long", source)
    return symbols


def _read_ring_id(smiles: str, i: int, source: str) -> Tuple[int, int]:
    """Reads a ring-closure number (``1`` or ``%12``).

    Returns:
        the ring number and the position right after it.
    """
    if smiles[i] != "%":
        return int(smiles[i]), i + 1

    digits = smiles[i + 1 : i + 3]
    if len(digits) != 2 or not digits.isdigit():
        raise EncodeError("Invalid SMILES: malformed ring number", source)
    return int(digits), i + 3


def _close_ring(
    opening: Tuple[int, str], right_idx: int, right_bond: str, source: str
) -> List[str]:
    """Builds the Ring symbol plus index symbols closing a ring at ``right_idx``.

    The decoder closes a ring from its latest atom back to
    ``prev - (Q + 1)``, so ``Q`` is the distance between the two ends minus 1.
    """
    left_idx, left_bond = opening
    distance = right_idx - left_idx
    if distance < 1:
        raise EncodeError("Invalid SMILES: ring bond to the same atom", source)

    index_symbols = _index_symbols(distance - 1, source)
    length = len(index_symbols)

    if left_bond in ("=", "#") or right_bond in ("=", "#"):
        ring_bond = left_bond if left_bond in ("=", "#") else right_bond
        symbol = f"[{ring_bond}Ring{length}]"
    elif left_bond in ("/", "\\") or right_bond in ("/", "\\"):
        stereo = (left_bond or "-") + (right_bond or "-")
        symbol = f"[{stereo}Ring{length}]"
    else:
        symbol = f"[Ring{length}]"

    return [symbol] + index_symbols


def _extract_branch(smiles: str, start: int, source: str) -> Tuple[str, int]:
    """Returns the content of the parentheses opened at ``start`` and the
    position of the matching closing parenthesis.
    """
    depth = 0
    for end in range(start, len(smiles)):
        if smiles[end] == "(":
            depth += 1
        elif smiles[end] == ")":
            depth -= 1
            if depth == 0:
                return smiles[start + 1 : end], end
    raise EncodeError("Unmatched parenthesis in SMILES", source)


def _read_bracket_atom(smiles: str, start: int, source: str) -> Tuple[str, int]:
    """Reads a bracket atom such as ``[nH]``, ``[13C]`` or ``[C@@H]``.

    Returns:
        the SELFIES atom body (element, or element with chirality) and the
        position right after the closing bracket.
    """
    end = smiles.find("]", start + 1)
    if end == -1:
        raise EncodeError("Invalid SMILES: unclosed bracket atom", source)
    content = smiles[start + 1 : end]

    i = 0
    while i < len(content) and content[i].isdigit():  # skip isotope
        i += 1

    if i < len(content) and content[i].isupper():
        element = content[i]
        if i + 1 < len(content) and content[i + 1].islower():
            element += content[i + 1]
    elif i < len(content) and content[i].islower():
        j = i
        while j < len(content) and content[j].islower():
            j += 1
        element = content[i:j].capitalize()
    else:
        raise EncodeError(
            f"Invalid SMILES: no element in bracket atom [{content}]", source
        )

    rest = content[i + len(element) :]
    chirality = "@@" if rest.startswith("@@") else "@" if rest.startswith("@") else ""
    if not chirality:
        if rest:
            logger.debug(f"Dropping annotations '{rest}' of bracket atom [{content}]")
        return element, end + 1

    hydrogen = "H" if rest[len(chirality) :].startswith("H") else ""
    return element + chirality + hydrogen, end + 1
