import pytest

from selfiescodec.encoder import encode
from selfiescodec.errors import EncodeError


@pytest.mark.parametrize(
    "smiles, selfies",
    [
        ("C", "[C]"),
        ("C=CF", "[C][=C][F]"),
        ("C#N", "[C][#N]"),
        ("C-C", "[C][C]"),
        ("ClCBr", "[Cl][C][Br]"),
        ("CC(C)C", "[C][C][Branch1][C][C][C]"),
        ("C(=O)C", "[C][=Branch1][C][=O][C]"),
        ("C1CC1", "[C][C][C][Ring1][Ring1]"),
        ("C%12CC%12", "[C][C][C][Ring1][Ring1]"),
        ("C1CCCCC1", "[C][C][C][C][C][C][Ring1][=Branch1]"),
        ("C=1CCC1", "[C][C][C][C][=Ring1][Ring2]"),
        ("c1ccccc1", "[C][=C][C][=C][C][=C][Ring1][=Branch1]"),
    ],
)
def test_encode(smiles, selfies):
    assert encode(smiles) == selfies


def test_encode_long_branch():
    selfies = encode("C(" + "C" * 17 + ")C")
    assert selfies.startswith("[C][Branch2][Ring1][C][C]")
    assert selfies.endswith("[C][C]")


def test_encode_stereo_markers():
    assert encode("F/C=C/F") == "[F][/C][=C][/F]"
    assert encode("C/1CCC/1") == "[C][C][C][C][//Ring1][Ring2]"


@pytest.mark.parametrize(
    "smiles, selfies",
    [
        ("[13CH3]C", "[C][C]"),
        ("[C@@H](F)O", "[C@@H][Branch1][C][F][O]"),
        ("C[nH]C", "[C][N][C]"),
        ("[Na+]", "[Na]"),
    ],
)
def test_encode_bracket_atoms(smiles, selfies):
    assert encode(smiles) == selfies


@pytest.mark.parametrize(
    "smiles",
    [
        "",
        "C(C",
        "C)C",
        "C=",
        "C==C",
        "C=)",
        "C1CC",
        "C11",
        "(C)C",
        "1CC1",
        "C()C",
        "C$",
        "[C",
        "[]C",
        "C%1",
        "C(1)CC1",
        "CC(0)",
        "-Pc(1)B@n#C",
    ],
)
def test_encode_invalid(smiles):
    with pytest.raises(EncodeError):
        encode(smiles)


def test_encode_error_reports_smiles():
    with pytest.raises(EncodeError) as excinfo:
        encode("C=")
    assert excinfo.value.smiles == "C="
    assert "bond symbol at end" in str(excinfo.value)
    assert "'C='" in str(excinfo.value)


def test_encode_non_string():
    with pytest.raises(TypeError):
        encode(None)
