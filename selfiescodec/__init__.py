"""Translation between SELFIES and SMILES molecular strings."""
__version__ = "0.1.0"

from .alphabet import (  # noqa: F401
    get_alphabet,
    get_alphabet_from_selfies,
    get_semantic_robust_alphabet,
    is_valid,
)
from .constraints import (  # noqa: F401
    get_bonding_capacity,
    get_preset_constraints,
    get_semantic_constraints,
    reset_constraints,
    set_semantic_constraints,
    validate_constraints,
)
from .decoder import decode, decode_to_ast, dump_ast  # noqa: F401
from .encoder import encode  # noqa: F401
from .encoding import (  # noqa: F401
    batch_flat_hot_to_selfies,
    batch_selfies_to_flat_hot,
    encoding_to_selfies,
    selfies_to_encoding,
    vocabulary_from_alphabet,
)
from .errors import (  # noqa: F401
    ConstraintsError,
    DecodeError,
    EncodeError,
    GrammarError,
    SelfiesError,
    TokenizeError,
)
from .grammar_rules import get_index_from_selfies, get_selfies_from_index  # noqa: F401
from .serializer import ast_to_smiles  # noqa: F401
from .tokenizer import join, len_selfies, split_selfies, tokenize  # noqa: F401
