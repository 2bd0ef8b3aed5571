"""Create a vocabulary of SELFIES symbols."""
import argparse
import logging
import os
import sys
from collections import Counter

from tqdm import tqdm

from selfiescodec import encode, split_selfies
from selfiescodec.decoder import NOP_SYMBOL
from selfiescodec.errors import EncodeError

logger = logging.getLogger(__name__)

# setup logging
logging.basicConfig(stream=sys.stdout, level=logging.INFO)

parser = argparse.ArgumentParser()
parser.add_argument(
    "input_filepath", type=str, help="data used to create a vocabulary."
)
parser.add_argument(
    "output_filepath", type=str, help="output where to store the vocabulary."
)
parser.add_argument(
    "--min_count", type=int, default=1, help="minimum occurrences to keep a symbol."
)
parser.add_argument(
    "--selfies",
    action="store_true",
    help="the input already holds SELFIES instead of SMILES.",
)


def main() -> None:
    """Create a vocabulary from the symbols of a dataset."""
    args = parser.parse_args()
    input_filepath = args.input_filepath
    output_filepath = args.output_filepath
    min_count = args.min_count

    vocabulary_counter = Counter()
    with open(input_filepath, "rt") as fp:
        for line in tqdm(fp):
            molecule = line.strip().split("\t")[0]
            if not molecule:
                continue
            if not args.selfies:
                try:
                    molecule = encode(molecule)
                except EncodeError as error:
                    logger.warning(f"Skipping molecule: {error}")
                    continue
            vocabulary_counter.update(split_selfies(molecule))

    # padding symbol first, the decoder skips it
    tokens = [NOP_SYMBOL] + [
        token
        for token, count in vocabulary_counter.most_common()
        if count >= min_count and token != NOP_SYMBOL
    ]
    with open(output_filepath, "wt") as fp:
        fp.write(os.linesep.join(tokens))
    logger.info(f"Vocabulary of {len(tokens)} symbols written to {output_filepath}")


if __name__ == "__main__":
    main()
