from typing import Callable, Iterable

import pytest


def scripted(readings: Iterable[int]) -> Callable[[], int]:
    """Clock that returns the given readings in order."""

    it = iter(readings)
    return lambda: next(it)


@pytest.fixture
def clock_factory():
    return scripted
