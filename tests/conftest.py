import pytest

from crucible.core.config import MAP_FILES
from crucible.core.parsing import load_map


@pytest.fixture
def example_grid():
    """13x13 sample city: 102 (standard), 94 (ultra)."""
    return load_map(MAP_FILES["01_example"])


@pytest.fixture
def corridor_grid():
    """5x12 sample where an ultra crucible needs 71."""
    return load_map(MAP_FILES["02_ultra_corridor"])
