"""Label and one-hot encodings of SELFIES for machine learning pipelines."""
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple, Union

import numpy as np

from .decoder import NOP_SYMBOL
from .tokenizer import len_selfies, split_selfies

ENC_TYPES = ("label", "one_hot", "both")

Encoding = Union[List[int], np.ndarray, Tuple[List[int], np.ndarray]]


def selfies_to_encoding(
    selfies: str,
    vocab_stoi: Mapping[str, int],
    pad_to_len: int = -1,
    enc_type: str = "both",
) -> Encoding:
    """Converts a SELFIES into its label and/or one-hot encoding.

    Args:
        selfies: the SELFIES to be encoded.
        vocab_stoi: maps every symbol of ``selfies`` (and ``[nop]`` when
            padding) to a unique index in ``0..len(vocab_stoi)-1``.
        pad_to_len: length to pad to with ``[nop]``. Defaults to -1, no
            padding. Ignored if shorter than the SELFIES.
        enc_type: ``label``, ``one_hot`` or ``both``.

    Returns:
        the label encoding (a list of indices), the one-hot encoding (a
        ``(length, len(vocab_stoi))`` array) or a tuple of both.

    Raises:
        KeyError: if a symbol is not in ``vocab_stoi``.
        ValueError: on an unknown ``enc_type``.
    """
    if enc_type not in ENC_TYPES:
        raise ValueError(f"enc_type must be one of {ENC_TYPES}, got '{enc_type}'")

    n_padding = pad_to_len - len_selfies(selfies)
    if n_padding > 0:
        selfies += NOP_SYMBOL * n_padding

    label = [vocab_stoi[symbol] for symbol in split_selfies(selfies)]
    if enc_type == "label":
        return label

    one_hot = np.zeros((len(label), len(vocab_stoi)), dtype=np.int64)
    one_hot[np.arange(len(label)), np.asarray(label, dtype=np.int64)] = 1
    if enc_type == "one_hot":
        return one_hot
    return label, one_hot


def encoding_to_selfies(
    encoding: Union[Sequence[int], np.ndarray],
    vocab_itos: Mapping[int, str],
    enc_type: str,
) -> str:
    """Converts a label or one-hot encoding back into a SELFIES.

    Padding ``[nop]`` symbols are kept; the decoder skips them.

    Args:
        encoding: a label list or a ``(length, vocab size)`` one-hot array.
        vocab_itos: the inverse of the ``vocab_stoi`` used to encode.
        enc_type: ``label`` or ``one_hot``.
    """
    if enc_type == "label":
        labels = [int(label) for label in encoding]
    elif enc_type == "one_hot":
        labels = np.argmax(np.asarray(encoding), axis=1).tolist()
    else:
        raise ValueError(f"enc_type must be 'label' or 'one_hot', got '{enc_type}'")
    return "".join(vocab_itos[label] for label in labels)


def batch_selfies_to_flat_hot(
    selfies_batch: Sequence[str],
    vocab_stoi: Mapping[str, int],
    pad_to_len: int = -1,
) -> np.ndarray:
    """One-hot encodes a batch of SELFIES into flat rows.

    Args:
        selfies_batch: the SELFIES to be encoded.
        vocab_stoi: see :func:`selfies_to_encoding`.
        pad_to_len: length every SELFIES is padded to. Defaults to -1, the
            length of the longest SELFIES in the batch.

    Returns:
        an array of shape ``(len(selfies_batch), pad_to_len * len(vocab_stoi))``.
    """
    if pad_to_len < 0:
        pad_to_len = max((len_selfies(selfies) for selfies in selfies_batch), default=0)

    rows = []
    for selfies in selfies_batch:
        one_hot = selfies_to_encoding(selfies, vocab_stoi, pad_to_len, "one_hot")
        rows.append(one_hot.flatten())
    if not rows:
        return np.zeros((0, pad_to_len * len(vocab_stoi)), dtype=np.int64)
    return np.stack(rows)


def batch_flat_hot_to_selfies(
    one_hot_batch: np.ndarray, vocab_itos: Mapping[int, str]
) -> List[str]:
    """Inverse of :func:`batch_selfies_to_flat_hot`."""
    one_hot_batch = np.asarray(one_hot_batch)
    vocab_size = len(vocab_itos)
    return [
        encoding_to_selfies(row.reshape(-1, vocab_size), vocab_itos, "one_hot")
        for row in one_hot_batch
    ]


def vocabulary_from_alphabet(
    alphabet: Iterable[str],
) -> Tuple[Dict[str, int], Dict[int, str]]:
    """Builds ``vocab_stoi`` and ``vocab_itos`` with ``[nop]`` at index 0."""
    symbols = [NOP_SYMBOL] + sorted(set(alphabet) - {NOP_SYMBOL})
    vocab_stoi = {symbol: idx for idx, symbol in enumerate(symbols)}
    vocab_itos = {idx: symbol for symbol, idx in vocab_stoi.items()}
    return vocab_stoi, vocab_itos
