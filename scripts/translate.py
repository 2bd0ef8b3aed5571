"""
Translate molecules between SMILES and SELFIES, starting from a .smi file.

One molecule per line; only the first tab-separated column is read.
Molecules that fail to translate are written as empty lines.
"""

import argparse
import logging
import os
import sys

from tqdm import tqdm

from selfiescodec import decode, encode
from selfiescodec.constraints import PRESET_CONSTRAINTS
from selfiescodec.errors import EncodeError

logger = logging.getLogger(__name__)

# setup logging
logging.basicConfig(stream=sys.stdout, level=logging.INFO)

parser = argparse.ArgumentParser()
parser.add_argument("input_filepath", type=str, help="path to the .smi file.")
parser.add_argument(
    "output_filepath", type=str, help="output where to store the translations."
)
parser.add_argument(
    "--direction",
    type=str,
    choices=["encode", "decode"],
    default="encode",
    help="encode: SMILES to SELFIES, decode: SELFIES to SMILES.",
)
parser.add_argument(
    "--constraints",
    type=str,
    choices=sorted(PRESET_CONSTRAINTS),
    default="default",
    help="bonding-capacity preset used when decoding.",
)


def main() -> None:
    """Translate a file of molecules."""
    args = parser.parse_args()
    input_filepath = args.input_filepath
    output_filepath = args.output_filepath

    if args.direction == "encode":
        translate = encode
    else:

        def translate(selfies: str) -> str:
            return decode(selfies, constraints=args.constraints)

    n_failed = 0
    n_total = 0
    with open(input_filepath, "rt") as fpr:
        with open(output_filepath, "wt") as fpw:
            molecule_generator = (line.strip().split("\t")[0] for line in fpr)
            for molecule in tqdm(molecule_generator):
                n_total += 1
                try:
                    fpw.write(f"{translate(molecule)}{os.linesep}")
                except EncodeError as error:
                    logger.warning(f"Problem processing molecule: {error}")
                    fpw.write(os.linesep)
                    n_failed += 1

    logger.info(
        f"Translated {n_total - n_failed}/{n_total} molecules into {output_filepath}"
    )


if __name__ == "__main__":
    main()
