"""Package setup."""
import io
import re

from setuptools import find_packages, setup

match = re.search(
    r'__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
    io.open("selfiescodec/__init__.py", encoding="utf_8_sig").read(),
)
if match is None:
    raise SystemExit("Version number not found.")
__version__ = match.group(1)

setup(
    name="selfiescodec",
    version=__version__,
    description="SELFIES <-> SMILES codec with an explicit derivation state machine",
    packages=find_packages(exclude=["tests", "tests.*"]),
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    package_data={"selfiescodec": ["py.typed"]},
    python_requires=">=3.7",
    install_requires=["numpy", "tqdm"],
    extras_require={"test": ["pytest"]},
)
