import pytest

from selfiescodec.constraints import (
    get_bonding_capacity,
    get_preset_constraints,
    get_semantic_constraints,
    resolve_constraints,
    set_semantic_constraints,
    validate_constraints,
    would_violate_constraints,
)
from selfiescodec.errors import ConstraintsError


def test_presets():
    assert get_preset_constraints("default")["S"] == 6
    assert get_preset_constraints("octet_rule")["S"] == 2
    assert get_preset_constraints("hypervalent")["Cl"] == 7
    for name in ("default", "octet_rule", "hypervalent"):
        validate_constraints(get_preset_constraints(name))


def test_unknown_preset():
    with pytest.raises(ConstraintsError):
        get_preset_constraints("tetravalent")
    with pytest.raises(ValueError):
        get_preset_constraints("tetravalent")


def test_getters_return_copies():
    get_preset_constraints("default")["C"] = 1
    get_semantic_constraints()["C"] = 1
    resolve_constraints(None)["C"] = 1
    assert get_semantic_constraints()["C"] == 4
    assert get_preset_constraints("default")["C"] == 4


def test_set_and_reset_constraints():
    set_semantic_constraints(get_preset_constraints("octet_rule"))
    assert get_semantic_constraints()["P"] == 3
    set_semantic_constraints()
    assert get_semantic_constraints()["P"] == 5


@pytest.mark.parametrize(
    "constraints",
    [
        {"C": 4},
        {"C": 0, "?": 8},
        {"C": 9, "?": 8},
        {"C": True, "?": 8},
        {"C": 2.5, "?": 8},
        [("C", 4)],
    ],
)
def test_invalid_constraints(constraints):
    with pytest.raises(ConstraintsError):
        validate_constraints(constraints)
    with pytest.raises(ConstraintsError):
        set_semantic_constraints(constraints)
    assert get_semantic_constraints()["C"] == 4


def test_get_bonding_capacity():
    assert get_bonding_capacity("N") == 3
    assert get_bonding_capacity("N", 1) == 4
    assert get_bonding_capacity("O", -1) == 1
    assert get_bonding_capacity("Xe") == 8
    assert get_bonding_capacity("C", 0, {"C": 2, "?": 5}) == 2
    assert get_bonding_capacity("Si", 0, {"C": 2, "?": 5}) == 5


def test_would_violate_constraints():
    assert would_violate_constraints("O", 0, 1, 2)
    assert not would_violate_constraints("C", 0, 2, 2)


def test_would_violate_explicit_constraints():
    octet_rule = get_preset_constraints("octet_rule")
    assert not would_violate_constraints("S", 0, 2, 2)
    assert would_violate_constraints("S", 0, 2, 2, octet_rule)
    set_semantic_constraints(octet_rule)
    assert not would_violate_constraints("S", 0, 2, 2, {"S": 6, "?": 8})
