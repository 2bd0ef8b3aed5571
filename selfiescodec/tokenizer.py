"""Splitting SELFIES strings into symbols."""
from typing import Iterable, Iterator, List

from .errors import TokenizeError


def split_selfies(selfies: str) -> Iterator[str]:
    """Splits a SELFIES into its symbols.

    Lenient: text outside of brackets is skipped and an unclosed trailing
    bracket is dropped, so any string can be fed to the decoder.

    Args:
        selfies: the SELFIES to be read.

    Returns:
        an iterator over the bracketed symbols of ``selfies`` in order.

    Example:
        >>> list(split_selfies("[C][=C][F]"))
        ['[C]', '[=C]', '[F]']
    """
    left_idx = selfies.find("[")

    while left_idx != -1:
        right_idx = selfies.find("]", left_idx + 1)
        if right_idx == -1:
            return
        # a nested '[' restarts the symbol, e.g. "[C[O]" yields "[O]"
        nested_idx = selfies.rfind("[", left_idx, right_idx)
        yield selfies[nested_idx : right_idx + 1]
        left_idx = selfies.find("[", right_idx + 1)


def tokenize(selfies: str) -> List[str]:
    """Strictly splits a SELFIES into its symbols.

    Args:
        selfies: the SELFIES to be read.

    Returns:
        the list of symbols; empty for an empty string.

    Raises:
        TokenizeError: on text outside brackets, an unclosed bracket or an
            empty symbol ``[]``.
    """
    tokens = []
    i = 0
    while i < len(selfies):
        if selfies[i] != "[":
            raise TokenizeError(
                f"unexpected character '{selfies[i]}' outside of brackets",
                token=selfies[i],
                position=i,
            )
        right_idx = selfies.find("]", i + 1)
        if right_idx == -1:
            raise TokenizeError("unclosed bracket", token=selfies[i:], position=i)

        token = selfies[i : right_idx + 1]
        if token == "[]":
            raise TokenizeError("empty symbol", token=token, position=i)
        if "[" in token[1:]:
            raise TokenizeError("nested bracket", token=token, position=i)

        tokens.append(token)
        i = right_idx + 1
    return tokens


def join(tokens: Iterable[str]) -> str:
    """Joins SELFIES symbols back into a string."""
    return "".join(tokens)


def len_selfies(selfies: str) -> int:
    """Returns the number of symbols in a SELFIES (not its character length)."""
    return selfies.count("[")
