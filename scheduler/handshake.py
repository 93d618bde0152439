"""
Bootstrap handshake

Gathers floor and elevator registrations before the dispatch loop starts.
Floors send [floor, port] and finally [0]; elevators send
[id, port, capacity] and finally a non-zero single byte. The handshake is
complete once both "done" signals have been seen, in either order.
"""

import logging
import time
from typing import Callable, Optional

from .core.elevator_state import ElevatorStateMachine
from .core.registry import ElevatorRecord, FloorRecord, Registry
from .errors import MalformedInitMessage, StartupTimeout
from .infrastructure.message_broker import MessageBroker
from .protocol.codec import decode_init
from .protocol.messages import ElevatorRegistration, FloorRegistration, InitDone, InitDoneKind

logger = logging.getLogger(__name__)


class BootstrapHandshake:
    """
    Populates the registry from init packets

    Args:
        transport: Datagram transport to receive on
        registry: Registry to populate
        broker: Optional message broker for telemetry events
        port_offset: Added to every port carried in a payload byte
        timeout: Seconds to wait for both signals; None waits forever
        state_machine_factory: Builds the state machine whose initial state
            new elevators start in
    """

    def __init__(self, transport, registry: Registry, broker: Optional[MessageBroker] = None,
                 port_offset: int = 0, timeout: Optional[float] = None,
                 state_machine_factory: Callable[[], ElevatorStateMachine] = ElevatorStateMachine):
        self.transport = transport
        self.registry = registry
        self.broker = broker
        self.port_offset = port_offset
        self.timeout = timeout
        self.state_machine = state_machine_factory()
        self.floors_done = False
        self.elevators_done = False

    @property
    def is_complete(self) -> bool:
        return self.floors_done and self.elevators_done

    def run(self) -> Registry:
        """
        Block until floors and elevators have both finished announcing

        Returns:
            The populated registry

        Raises:
            StartupTimeout: If the deadline passes first
            TransportFailure: On socket errors
        """
        deadline = None if self.timeout is None else time.monotonic() + self.timeout
        logger.info("Waiting for floor and elevator registrations...")

        while not self.is_complete:
            remaining = None
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    self._raise_timeout()

            datagram = self.transport.receive(timeout=remaining)
            if datagram is None:
                continue
            self.process(datagram.payload, port=datagram.port)

        logger.info("Handshake complete: %d floors, %d elevators",
                    self.registry.floor_count, self.registry.elevator_count)
        self._publish('handshake/complete', self.registry.to_dict())
        return self.registry

    def process(self, payload: bytes, port: Optional[int] = None) -> bool:
        """
        Handle one init payload

        Malformed payloads and duplicate registrations are logged and
        skipped; they never abort the handshake.

        Returns:
            True once both done signals have been observed
        """
        try:
            message = decode_init(payload)
            if isinstance(message, InitDone):
                self._mark_done(message.kind)
            elif isinstance(message, FloorRegistration):
                self._register_floor(message)
            elif isinstance(message, ElevatorRegistration):
                self._register_elevator(message)
        except MalformedInitMessage as e:
            if e.payload is None:
                e.payload = bytes(payload)
            if e.port is None:
                e.port = port
            logger.warning("Skipping init message: %s", e)
            self._publish('handshake/malformed', {'port': port, 'data': list(payload), 'reason': e.message})
        return self.is_complete

    def _mark_done(self, kind: InitDoneKind):
        if kind is InitDoneKind.FLOORS:
            already_done = self.floors_done
            self.floors_done = True
        else:
            already_done = self.elevators_done
            self.elevators_done = True

        if already_done:
            logger.warning("Repeated '%s initialized' signal ignored", kind.value.lower())
        else:
            logger.info("---- %s initialized ----", kind.value.lower())
            self._publish('handshake/signal', {'kind': kind.value})

    def _resolve_port(self, port_byte: int, owner: str) -> int:
        # Port 0 cannot be a send target
        port = port_byte + self.port_offset
        if port == 0:
            raise MalformedInitMessage(f"{owner} announced port 0")
        return port

    def _register_floor(self, message: FloorRegistration):
        port = self._resolve_port(message.metadata, f"Floor {message.floor_number}")
        floor = FloorRecord(floor_number=message.floor_number, port=port)
        self.registry.add_floor(floor)
        logger.info("---- ADDED FLOOR ---- %s", floor)
        self._publish('registry/floor_added', {'floor': floor.floor_number, 'port': floor.port})

    def _register_elevator(self, message: ElevatorRegistration):
        port = self._resolve_port(message.metadata1, f"Elevator {message.elevator_id}")
        elevator = ElevatorRecord(
            elevator_id=message.elevator_id,
            state=self.state_machine.current_state,
            port=port,
            capacity=message.metadata2,
        )
        self.registry.add_elevator(elevator)
        logger.info("---- ADDED ELEVATOR ---- %s", elevator)
        self._publish('registry/elevator_added', {
            'elevator': elevator.elevator_id,
            'port': elevator.port,
            'capacity': elevator.capacity,
            'state': elevator.state.value,
        })

    def _raise_timeout(self):
        missing = []
        if not self.floors_done:
            missing.append('floors')
        if not self.elevators_done:
            missing.append('elevators')
        raise StartupTimeout(f"Handshake timed out after {self.timeout}s waiting for: {', '.join(missing)}")

    def _publish(self, topic: str, message: dict):
        if self.broker is not None:
            self.broker.put(topic, message)
