"""Exceptions raised by selfiescodec."""
from typing import Optional


class SelfiesError(Exception):
    """Base class for all selfiescodec errors."""


class DecodeError(SelfiesError):
    """Raised by the strict SELFIES helpers (the decoder itself is total)."""

    def __init__(
        self, message: str, token: Optional[str] = None, position: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.token = token
        self.position = position


class TokenizeError(DecodeError):
    """Raised when a SELFIES string cannot be split into bracketed symbols."""


class EncodeError(SelfiesError):
    """Raised when a SMILES string cannot be translated into SELFIES."""

    def __init__(self, message: str, smiles: Optional[str] = None) -> None:
        super().__init__(message)
        self.smiles = smiles

    def __str__(self) -> str:
        message = super().__str__()
        if self.smiles is None:
            return message
        return f"{message} (SMILES={self.smiles!r})"


class GrammarError(SelfiesError, ValueError):
    """Raised when a derivation rule is applied in a state it does not accept."""


class ConstraintsError(SelfiesError, ValueError):
    """Raised for malformed bonding-capacity tables or unknown presets."""
