from __future__ import annotations

import pytest

from priority_sim import ProcessSpec
from priority_sim.workload import sample_workload


@pytest.fixture
def sample() -> list[ProcessSpec]:
    return sample_workload()
