"""Identifier generators.

Every registered definition, assembled test case and test step receives
a unique string identifier from a single-call factory. Production code
uses random identifiers; tests substitute a deterministic counter.
"""

from collections.abc import Callable
from itertools import count
from uuid import uuid4

#: Factory producing a fresh unique identifier on each call.
type NewId = Callable[[], str]


def uuid() -> NewId:
    """Create a generator of random UUID4 identifiers.

    Safe to share between concurrent plan assemblies.
    """
    return lambda: str(uuid4())


def incrementing(start: int = 0) -> NewId:
    """Create a generator of incrementing numeric identifiers.

    The generator is deterministic and intended for tests. It must not be
    shared between concurrent build or assembly operations.

    Args:
        start: First issued number.

    Returns:
        A callable returning `'0'`, `'1'`, `'2'` and so on.
    """
    counter = count(start)

    return lambda: str(next(counter))
