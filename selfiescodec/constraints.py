"""Semantic (bonding capacity) constraints of the SELFIES derivation.

The keys of a constraints table are atoms and/or ions (e.g. ``I``, ``N+1``).
An ion is written ``E+C`` or ``E-C`` where ``E`` is an element and ``C`` a
positive integer. The value is the maximum number of bonds that atom or ion
can make, between 1 and 8 inclusive. ``'?'`` is mandatory and gives the
capacity of any atom or ion missing from the table.

The decoder never reads the process-wide table while deriving: it takes a
snapshot through :func:`resolve_constraints` at the start of each call.
"""
import logging
from typing import Dict, Mapping, Optional, Union

from .errors import ConstraintsError

logger = logging.getLogger(__name__)

default_bond_constraints = {
    "H": 1,
    "F": 1,
    "Cl": 1,
    "Br": 1,
    "I": 1,
    "O": 2,
    "O+1": 3,
    "O-1": 1,
    "N": 3,
    "N+1": 4,
    "N-1": 2,
    "C": 4,
    "C+1": 3,
    "C-1": 3,
    "B": 3,
    "B+1": 2,
    "B-1": 4,
    "S": 6,
    "S+1": 5,
    "S-1": 5,
    "P": 5,
    "P+1": 4,
    "P-1": 6,
    "?": 8,
}

octet_rule_bond_constraints = dict(default_bond_constraints)
octet_rule_bond_constraints.update(
    {"S": 2, "S+1": 3, "S-1": 1, "P": 3, "P+1": 2, "P-1": 4}
)

hypervalent_bond_constraints = dict(default_bond_constraints)
hypervalent_bond_constraints.update(
    {"Cl": 7, "Br": 7, "I": 7, "N": 5, "N+1": 6, "N-1": 4}
)

PRESET_CONSTRAINTS: Dict[str, Dict[str, int]] = {
    "default": default_bond_constraints,
    "octet_rule": octet_rule_bond_constraints,
    "hypervalent": hypervalent_bond_constraints,
}

ConstraintsLike = Union[None, str, Mapping[str, int]]

_bond_constraints = dict(default_bond_constraints)


def get_preset_constraints(name: str) -> Dict[str, int]:
    """Returns a copy of a preset constraints table.

    Args:
        name: one of ``default``, ``octet_rule`` or ``hypervalent``.

    Returns:
        the preset table.
    """
    if name not in PRESET_CONSTRAINTS:
        raise ConstraintsError(
            f"unknown preset '{name}'. Valid presets: {', '.join(PRESET_CONSTRAINTS)}"
        )
    return dict(PRESET_CONSTRAINTS[name])


def get_semantic_constraints() -> Dict[str, int]:
    """Returns a copy of the constraints table currently in use."""
    return dict(_bond_constraints)


def validate_constraints(constraints: Mapping[str, int]) -> None:
    """Checks that a constraints table is well formed.

    Args:
        constraints: table to check.

    Raises:
        ConstraintsError: if ``'?'`` is missing or a capacity is not an
            integer between 1 and 8 inclusive.
    """
    if not isinstance(constraints, Mapping):
        raise ConstraintsError(
            f"constraints must be a mapping, got {type(constraints).__name__}"
        )
    if "?" not in constraints:
        raise ConstraintsError("constraints missing '?' as a key.")

    for key, value in constraints.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConstraintsError(
                f"constraints['{key}'] must be an integer, got {value!r}."
            )
        if not (1 <= value <= 8):
            raise ConstraintsError(
                f"constraints['{key}'] not between 1 and 8 inclusive."
            )


def set_semantic_constraints(constraints: Optional[Mapping[str, int]] = None) -> None:
    """Configures the process-wide constraints table.

    Args:
        constraints: the new table. Defaults to None, in which case the
            default preset is restored.
    """
    global _bond_constraints

    if constraints is None:
        _bond_constraints = dict(default_bond_constraints)
        return

    validate_constraints(constraints)
    _bond_constraints = dict(constraints)
    logger.debug(f"Semantic constraints updated ({len(_bond_constraints)} keys)")


def reset_constraints() -> None:
    """Restores the default preset."""
    set_semantic_constraints(None)


def resolve_constraints(constraints: ConstraintsLike = None) -> Dict[str, int]:
    """Takes a private snapshot of a constraints table.

    Args:
        constraints: None for the process-wide table, a preset name, or an
            explicit table (validated).

    Returns:
        a copy that can be read without further synchronization.
    """
    if constraints is None:
        return get_semantic_constraints()
    if isinstance(constraints, str):
        return get_preset_constraints(constraints)
    validate_constraints(constraints)
    return dict(constraints)


def _constraint_key(element: str, charge: int) -> str:
    if charge == 0:
        return element
    return f"{element}{charge:+}"


def get_bonding_capacity(
    element: str, charge: int = 0, constraints: Optional[Mapping[str, int]] = None
) -> int:
    """Returns the maximum number of bonds an atom or ion can make.

    Args:
        element: element symbol, e.g. ``N``.
        charge: formal charge. Defaults to 0.
        constraints: table to read from. Defaults to the process-wide one.

    Returns:
        the bonding capacity, or the ``'?'`` capacity if unlisted.
    """
    table = _bond_constraints if constraints is None else constraints
    return table.get(_constraint_key(element, charge), table["?"])


def would_violate_constraints(
    element: str,
    charge: int,
    used_bonds: int,
    new_bond_order: int,
    constraints: Optional[Mapping[str, int]] = None,
) -> bool:
    """Whether adding a bond of ``new_bond_order`` exceeds the atom's capacity.

    ``constraints`` defaults to the process-wide table, as in
    :func:`get_bonding_capacity`.
    """
    capacity = get_bonding_capacity(element, charge, constraints)
    return used_bonds + new_bond_order > capacity
