import pytest

from selfiescodec.errors import GrammarError
from selfiescodec.grammar_rules import (
    INDEX_ALPHABET,
    AtomToken,
    BranchToken,
    NopToken,
    RingToken,
    classify_symbol,
    get_bond_from_num,
    get_index_from_selfies,
    get_num_from_bond,
    get_selfies_from_index,
    next_atom_state,
    next_branch_state,
    next_ring_state,
    parse_atom_symbol,
    process_branch_symbol,
    process_ring_symbol,
)


def test_index_alphabet_order():
    assert len(INDEX_ALPHABET) == 16
    assert INDEX_ALPHABET[0] == "[C]"
    assert INDEX_ALPHABET[4] == "[=Branch1]"
    assert INDEX_ALPHABET[15] == "[P]"


def test_index_round_trip():
    for n in range(10000):
        assert get_index_from_selfies(get_selfies_from_index(n)) == n


@pytest.mark.parametrize(
    "index, symbols",
    [
        (0, ["[C]"]),
        (1, ["[Ring1]"]),
        (15, ["[P]"]),
        (16, ["[Ring1]", "[C]"]),
        (255, ["[P]", "[P]"]),
        (256, ["[Ring1]", "[C]", "[C]"]),
    ],
)
def test_get_selfies_from_index(index, symbols):
    assert get_selfies_from_index(index) == symbols


def test_get_selfies_from_negative_index():
    with pytest.raises(ValueError):
        get_selfies_from_index(-1)


def test_unknown_index_symbols_count_as_zero():
    assert get_index_from_selfies(["[Xe]", "[O]"]) == 9
    assert get_index_from_selfies([]) == 0


def test_bond_symbols():
    assert get_num_from_bond("") == 1
    assert get_num_from_bond("=") == 2
    assert get_num_from_bond("#") == 3
    assert get_num_from_bond("/") == 1
    assert [get_bond_from_num(n) for n in (1, 2, 3)] == ["", "=", "#"]


@pytest.mark.parametrize(
    "symbol, expected",
    [
        ("[Branch1]", (1, 1)),
        ("[=Branch2]", (2, 2)),
        ("[#Branch3]", (3, 3)),
        ("[Branch4]", None),
        ("[Ring1]", None),
        ("[C]", None),
    ],
)
def test_process_branch_symbol(symbol, expected):
    assert process_branch_symbol(symbol) == expected


@pytest.mark.parametrize(
    "symbol, expected",
    [
        ("[Ring1]", (1, 1, None)),
        ("[=Ring2]", (2, 2, None)),
        ("[#Ring3]", (3, 3, None)),
        ("[-/Ring1]", (1, 1, "-/")),
        ("[\\/Ring2]", (1, 2, "\\/")),
        ("[Ring0]", None),
        ("[Branch1]", None),
    ],
)
def test_process_ring_symbol(symbol, expected):
    assert process_ring_symbol(symbol) == expected


@pytest.mark.parametrize(
    "symbol, expected",
    [
        ("[C]", AtomToken("C")),
        ("[=O]", AtomToken("O", 2)),
        ("[#N]", AtomToken("N", 3)),
        ("[/C]", AtomToken("C", 1)),
        ("[\\Br]", AtomToken("Br", 1)),
        ("[C@@H]", AtomToken("C", 1, "C@@H")),
        ("[=C@H]", AtomToken("C", 2, "C@H")),
        ("[Cl]", AtomToken("Cl")),
        ("[Xe]", None),
        ("[nop]", None),
    ],
)
def test_parse_atom_symbol(symbol, expected):
    assert parse_atom_symbol(symbol) == expected


def test_classify_symbol():
    assert classify_symbol("[C]") == AtomToken("C")
    assert classify_symbol("[=Branch1]") == BranchToken(2, 1)
    assert classify_symbol("[Ring2]") == RingToken(1, 2)
    assert classify_symbol("[nop]") == NopToken("[nop]")
    assert classify_symbol("[Xe]") == NopToken("[Xe]")
    assert classify_symbol("C") == NopToken("C")


@pytest.mark.parametrize(
    "requested, capacity, state, expected",
    [
        (2, 4, 0, (0, 4)),
        (1, 1, 0, (0, 1)),
        (1, 4, 3, (1, 3)),
        (2, 4, 1, (1, 3)),
        (3, 2, 4, (2, None)),
        (2, 2, 2, (2, None)),
    ],
)
def test_next_atom_state(requested, capacity, state, expected):
    assert next_atom_state(requested, capacity, state) == expected


def test_next_atom_state_never_exceeds_limits():
    for requested in (1, 2, 3):
        for capacity in range(1, 9):
            for state in range(1, 9):
                actual, _ = next_atom_state(requested, capacity, state)
                assert actual <= min(requested, state, capacity)


def test_next_branch_state():
    assert next_branch_state(1, 4) == (1, 3)
    assert next_branch_state(2, 4) == (2, 2)
    assert next_branch_state(3, 3) == (2, 1)
    for state in (None, 0, 1):
        with pytest.raises(GrammarError):
            next_branch_state(1, state)


def test_next_ring_state():
    assert next_ring_state(1, 4) == (1, 3)
    assert next_ring_state(3, 2) == (2, None)
    assert next_ring_state(2, 1) == (1, None)
    with pytest.raises(GrammarError):
        next_ring_state(1, 0)
    with pytest.raises(ValueError):
        next_ring_state(1, None)
