import numpy as np
import pytest

from selfiescodec.encoding import (
    batch_flat_hot_to_selfies,
    batch_selfies_to_flat_hot,
    encoding_to_selfies,
    selfies_to_encoding,
    vocabulary_from_alphabet,
)

VOCAB_STOI = {"[nop]": 0, "[C]": 1, "[=C]": 2, "[F]": 3}
VOCAB_ITOS = {idx: symbol for symbol, idx in VOCAB_STOI.items()}


def test_label_encoding():
    label = selfies_to_encoding("[C][=C][F]", VOCAB_STOI, 5, "label")
    assert label == [1, 2, 3, 0, 0]
    assert encoding_to_selfies(label, VOCAB_ITOS, "label") == (
        "[C][=C][F][nop][nop]"
    )


def test_one_hot_encoding():
    one_hot = selfies_to_encoding("[C][=C][F]", VOCAB_STOI, enc_type="one_hot")
    assert one_hot.shape == (3, 4)
    assert np.all(one_hot.sum(axis=1) == 1)
    assert one_hot[1, 2] == 1
    assert encoding_to_selfies(one_hot, VOCAB_ITOS, "one_hot") == "[C][=C][F]"


def test_both_encodings():
    label, one_hot = selfies_to_encoding("[F][C]", VOCAB_STOI)
    assert label == [3, 1]
    assert one_hot.tolist() == [[0, 0, 0, 1], [0, 1, 0, 0]]


def test_encoding_errors():
    with pytest.raises(KeyError):
        selfies_to_encoding("[O]", VOCAB_STOI)
    with pytest.raises(ValueError):
        selfies_to_encoding("[C]", VOCAB_STOI, enc_type="two_hot")
    with pytest.raises(ValueError):
        encoding_to_selfies([1], VOCAB_ITOS, "both")


def test_batch_flat_hot():
    batch = ["[C][F]", "[C][=C][F]"]
    flat_hot = batch_selfies_to_flat_hot(batch, VOCAB_STOI)
    assert flat_hot.shape == (2, 12)
    assert flat_hot.sum() == 6
    assert batch_flat_hot_to_selfies(flat_hot, VOCAB_ITOS) == [
        "[C][F][nop]",
        "[C][=C][F]",
    ]


def test_vocabulary_from_alphabet():
    vocab_stoi, vocab_itos = vocabulary_from_alphabet({"[F]", "[C]", "[nop]"})
    assert vocab_stoi == {"[nop]": 0, "[C]": 1, "[F]": 2}
    assert vocab_itos == {0: "[nop]", 1: "[C]", 2: "[F]"}
