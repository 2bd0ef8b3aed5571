import pytest

from selfiescodec.errors import DecodeError, TokenizeError
from selfiescodec.tokenizer import join, len_selfies, split_selfies, tokenize


def test_split_selfies():
    assert list(split_selfies("[C][=C][F]")) == ["[C]", "[=C]", "[F]"]
    assert list(split_selfies("")) == []


def test_split_selfies_is_lenient():
    assert list(split_selfies("x[C]y[O")) == ["[C]"]
    assert list(split_selfies("[C[O]")) == ["[O]"]


def test_tokenize():
    assert tokenize("[C][Branch1][C][F]") == ["[C]", "[Branch1]", "[C]", "[F]"]
    assert tokenize("") == []


@pytest.mark.parametrize(
    "selfies, position",
    [("[C]x", 3), ("[C][O", 3), ("[C][]", 3), ("[C[O]", 0), ("C", 0)],
)
def test_tokenize_invalid(selfies, position):
    with pytest.raises(TokenizeError) as excinfo:
        tokenize(selfies)
    assert excinfo.value.position == position
    assert isinstance(excinfo.value, DecodeError)


def test_join_and_len():
    symbols = ["[C]", "[=O]"]
    assert join(symbols) == "[C][=O]"
    assert len_selfies("[C][=O]") == 2
    assert len_selfies("") == 0
