"""SELFIES alphabets and syntactic validity."""
from functools import lru_cache
from itertools import product
from typing import FrozenSet, Iterable, Set

from .constraints import ConstraintsLike, resolve_constraints
from .errors import TokenizeError
from .tokenizer import split_selfies, tokenize

# Elements written without brackets in SMILES.
ORGANIC_SUBSET = ("B", "C", "N", "O", "S", "P", "F", "Cl", "Br", "I")

BOND_PREFIXES = {"": 1, "=": 2, "#": 3}


def _structural_symbols() -> Set[str]:
    symbols = set()
    for length in range(1, 4):
        symbols.add(f"[Ring{length}]")
        for prefix in BOND_PREFIXES:
            symbols.add(f"[{prefix}Branch{length}]")
    return symbols


@lru_cache(maxsize=1)
def _full_alphabet() -> FrozenSet[str]:
    symbols = _structural_symbols()
    for element, prefix in product(ORGANIC_SUBSET, BOND_PREFIXES):
        symbols.add(f"[{prefix}{element}]")
    return frozenset(symbols)


def get_alphabet() -> Set[str]:
    """Returns the SELFIES symbols of the organic subset.

    Covers every organic-subset atom with each bond prefix, plus the Branch
    and Ring symbols.

    Returns:
        a new set, safe to modify.
    """
    return set(_full_alphabet())


def get_semantic_robust_alphabet(constraints: ConstraintsLike = None) -> Set[str]:
    """Returns the symbols that are semantically constrained.

    An atom symbol is kept only if its bond prefix does not exceed the
    bonding capacity of its element, e.g. ``[#O]`` is absent under the
    default constraints since oxygen makes at most two bonds.

    Args:
        constraints: table to read capacities from, see
            :func:`selfiescodec.decoder.decode`.

    Returns:
        a subset of all symbols that are semantically constrained.
    """
    capacities = resolve_constraints(constraints)
    alphabet_subset = _structural_symbols()

    for element, (prefix, order) in product(ORGANIC_SUBSET, BOND_PREFIXES.items()):
        if order > capacities.get(element, capacities["?"]):
            continue
        alphabet_subset.add(f"[{prefix}{element}]")

    return alphabet_subset


def get_alphabet_from_selfies(selfies_iter: Iterable[str]) -> Set[str]:
    """Constructs an alphabet from an iterable of SELFIES.

    Example:
        >>> sorted(get_alphabet_from_selfies(["[C][F]", "[C][=C]"]))
        ['[=C]', '[C]', '[F]']
    """
    alphabet = set()
    for selfies in selfies_iter:
        alphabet.update(split_selfies(selfies))
    return alphabet


def is_valid(selfies: str) -> bool:
    """Whether a SELFIES is made only of organic-subset alphabet symbols.

    This is a syntactic check; the decoder accepts any string.
    """
    if not selfies:
        return False
    try:
        symbols = tokenize(selfies)
    except TokenizeError:
        return False
    alphabet = _full_alphabet()
    return all(symbol in alphabet for symbol in symbols)
