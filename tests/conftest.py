import pytest

from selfiescodec.constraints import reset_constraints


@pytest.fixture(autouse=True)
def default_constraints():
    """Every test starts and ends with the default bonding capacities."""
    reset_constraints()
    yield
    reset_constraints()
