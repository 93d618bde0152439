"""
Nearest Car Strategy

Distance-based elevator allocation with a direction penalty.
"""

import logging
from typing import Optional

from scheduler.core.registry import ElevatorRecord, Registry
from scheduler.protocol.messages import Direction
from ..interfaces.allocation_strategy import IAllocationStrategy

logger = logging.getLogger(__name__)


class NearestCarStrategy(IAllocationStrategy):
    """
    Nearest car allocation strategy

    Selection Logic:
    - Idle elevators: Simple distance calculation
    - Moving elevators: Consider circular movement
      * UP: Goes to top floor, then reverses to DOWN
      * DOWN: Goes to floor 0, then reverses to UP
    - Lowest cost wins; ties go to the lowest elevator id

    Usage:
        strategy = NearestCarStrategy()
        selected = strategy.select_elevator(Direction.UP, 3, registry)
    """

    def __init__(self, num_floors: Optional[int] = None):
        """
        Initialize strategy

        Args:
            num_floors: Top floor number of the building. When omitted the
                highest registered floor number is used.
        """
        self.num_floors = num_floors

    def select_elevator(self, direction: Direction, floor_number: int, registry: Registry) -> ElevatorRecord:
        """
        Select the elevator with the shortest travel distance

        Args:
            direction: Requested direction
            floor_number: Floor where the request was made
            registry: Registry holding every known elevator

        Returns:
            Selected elevator record
        """
        self.require_elevators(registry, direction, floor_number)
        top_floor = self._top_floor(registry, floor_number)

        best_elevator = None
        best_score = float('inf')

        for elevator in sorted(registry.elevators, key=lambda e: e.elevator_id):
            distance = self._calculate_circular_distance(
                elevator.current_floor, elevator.direction, floor_number, direction, top_floor
            )

            # Strict comparison keeps the lowest id on ties
            if distance < best_score:
                best_score = distance
                best_elevator = elevator

            logger.debug("[GCS] Elevator %d: Floor=%d, State=%s, Distance=%d",
                         elevator.elevator_id, elevator.current_floor, elevator.state.value, distance)

        logger.debug("[GCS] Selected elevator %d with distance=%d", best_elevator.elevator_id, best_score)
        return best_elevator

    def _top_floor(self, registry: Registry, floor_number: int) -> int:
        if self.num_floors is not None:
            top_floor = self.num_floors
        else:
            top_floor = max((f.floor_number for f in registry.floors), default=0)
        # Never let a call or car sit above the assumed top of the shaft
        highest_car = max(e.current_floor for e in registry.elevators)
        return max(top_floor, floor_number, highest_car)

    def _calculate_circular_distance(
        self,
        car_floor: int,
        car_direction: Optional[Direction],
        call_floor: int,
        call_direction: Direction,
        top_floor: int
    ) -> int:
        """
        Calculate travel distance considering circular elevator movement

        Args:
            car_floor: Current floor of the elevator
            car_direction: Travel direction, or None when not travelling
            call_floor: Floor where the request was made
            call_direction: Direction of the request
            top_floor: Highest floor the car can reverse at

        Returns:
            Estimated travel distance in floors
        """
        if car_direction is None:
            return abs(call_floor - car_floor)

        if car_direction is Direction.UP:
            if call_direction is Direction.UP and call_floor >= car_floor:
                # Call is ahead in the same direction
                return call_floor - car_floor
            # Run to the top, then come back down to the call
            return (top_floor - car_floor) + (top_floor - call_floor)

        if call_direction is Direction.DOWN and call_floor <= car_floor:
            return car_floor - call_floor
        # Run to the bottom, then come back up to the call
        return car_floor + call_floor

    def get_strategy_name(self) -> str:
        """Return strategy name"""
        return "Nearest Car (Circular Distance-based)"
