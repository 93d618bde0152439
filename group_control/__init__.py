"""
Elevator Group Control

This package provides the allocation strategies that decide which
elevator answers a floor request.
"""

__version__ = "0.1.0"

from typing import Dict, Type

from .interfaces.allocation_strategy import IAllocationStrategy
from .algorithms.first_registered import FirstRegisteredStrategy
from .algorithms.nearest_car import NearestCarStrategy

STRATEGY_REGISTRY: Dict[str, Type[IAllocationStrategy]] = {
    'FirstRegistered': FirstRegisteredStrategy,
    'NearestCar': NearestCarStrategy,
}


def get_strategy(name: str, **parameters) -> IAllocationStrategy:
    """
    Build an allocation strategy by configuration name

    Raises:
        ValueError: If the name is unknown
    """
    cls = STRATEGY_REGISTRY.get(name)
    if cls is None:
        raise ValueError(f"Unknown allocation strategy '{name}'. Available: {', '.join(STRATEGY_REGISTRY)}")
    return cls(**parameters)


__all__ = [
    'IAllocationStrategy',
    'FirstRegisteredStrategy',
    'NearestCarStrategy',
    'STRATEGY_REGISTRY',
    'get_strategy',
]
