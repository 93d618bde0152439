"""
Allocation Strategy Interface

Defines how elevators are selected for floor requests.
"""

from abc import ABC, abstractmethod

from scheduler.core.registry import ElevatorRecord, Registry
from scheduler.errors import NoElevatorAvailable
from scheduler.protocol.messages import Direction


class IAllocationStrategy(ABC):
    """
    Interface for elevator allocation strategies

    Defines how to select the elevator that answers a floor request.
    The dispatch loop only talks to this interface, so strategies can be
    swapped through configuration without touching the loop.

    Usage Examples:
    - FirstRegistered: Baseline, always the first registered elevator
    - NearestCar: Distance-based selection with direction penalty
    """

    @abstractmethod
    def select_elevator(
        self,
        direction: Direction,
        floor_number: int,
        registry: Registry
    ) -> ElevatorRecord:
        """
        Select the elevator for a floor request

        Args:
            direction: Requested travel direction
            floor_number: Floor the request is for
            registry: Registry holding every known elevator

        Returns:
            ElevatorRecord: One registered elevator

        Raises:
            NoElevatorAvailable: If the registry holds no elevators

        Design Notes:
            - Must be deterministic for a fixed registry and request
            - Must return a record taken from the registry
        """
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        """
        Get the name of this strategy

        Returns:
            str: Strategy name (for logging and debugging)
        """
        pass

    @staticmethod
    def require_elevators(registry: Registry, direction: Direction, floor_number: int):
        """Raise NoElevatorAvailable when there is nothing to select from"""
        if registry.elevator_count == 0:
            raise NoElevatorAvailable(
                f"No elevator registered to serve floor {floor_number} ({direction.name})")
