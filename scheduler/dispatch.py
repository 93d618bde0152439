"""
Dispatch loop

Steady-state service: receive one packet, decode it, choose the elevator
or floor it concerns and send a one-byte reply. Requests are handled
strictly in receipt order on a single worker.
"""

import logging
import threading
from typing import Optional

from group_control.interfaces.allocation_strategy import IAllocationStrategy
from .core.registry import Registry
from .errors import InvalidRequest, NoElevatorAvailable
from .infrastructure.message_broker import MessageBroker
from .protocol.codec import (
    decode_request, is_valid, direction_from_byte, encode_elevator_dispatch, encode_floor_update,
)
from .protocol.messages import Datagram, DestinationRequest, Direction, ElevatorStatusUpdate, FloorCall

logger = logging.getLogger(__name__)


class DispatchLoop:
    """
    Receive → decode → select → encode → send

    A bad packet only ends its own iteration; socket errors
    (TransportFailure) propagate out of run().

    Args:
        transport: Datagram transport shared with the handshake
        registry: Populated registry (read-only here)
        strategy: Allocation strategy choosing elevators
        broker: Optional message broker for telemetry events
        port_offset: Added to reply ports carried in a payload byte
        peer_host: Host replies are addressed to
        poll_interval: Receive timeout used to notice stop()
    """

    def __init__(self, transport, registry: Registry, strategy: IAllocationStrategy,
                 broker: Optional[MessageBroker] = None, port_offset: int = 0,
                 peer_host: str = 'localhost', poll_interval: float = 0.5):
        self.transport = transport
        self.registry = registry
        self.strategy = strategy
        self.broker = broker
        self.port_offset = port_offset
        self.peer_host = peer_host
        self.poll_interval = poll_interval
        self._stop_event = threading.Event()

    def run(self):
        logger.info("Dispatch loop running with strategy: %s", self.strategy.get_strategy_name())
        while not self._stop_event.is_set():
            self.run_once()
        logger.info("Dispatch loop stopped")

    def stop(self):
        """Ask run() to return after the current iteration"""
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def run_once(self) -> Optional[Datagram]:
        """
        One iteration of the loop

        Returns:
            The reply that was sent, or None if nothing arrived or the
            request was rejected
        """
        datagram = self.transport.receive(timeout=self.poll_interval)
        if datagram is None:
            return None

        self._log_received(datagram)
        try:
            reply = self.handle_datagram(datagram)
        except (InvalidRequest, NoElevatorAvailable) as e:
            self._reject(datagram, e)
            return None

        self.send(reply)
        return reply

    def handle_datagram(self, datagram: Datagram) -> Datagram:
        """
        Build the reply for one received packet

        Raises:
            InvalidRequest: Bad length, direction byte or floor number
            NoElevatorAvailable: Registry holds no elevators
        """
        payload = datagram.payload
        request = decode_request(payload)

        if isinstance(request, FloorCall):
            if not is_valid(payload, self.registry.floor_count):
                raise InvalidRequest("Invalid floor call", payload=payload, port=datagram.port)
            direction = direction_from_byte(request.direction_byte)
            return self.dispatch_elevator(direction, request.floor_number, 'floor_call')

        if isinstance(request, DestinationRequest):
            floor_number = request.floor_number
            if not self.registry.has_floor_number(floor_number):
                raise InvalidRequest("Destination floor out of range", payload=payload, port=datagram.port)
            # No direction byte in this message; derive it from the first byte
            direction = direction_from_byte(floor_number)
            return self.dispatch_elevator(direction, floor_number, 'destination')

        # ElevatorStatusUpdate: forward the status byte to the floor's port
        return self.route_status_update(request)

    def dispatch_elevator(self, direction: Direction, floor_number: int, request_kind: str) -> Datagram:
        """Run the allocation strategy and address a dispatch packet to the chosen elevator"""
        elevator = self.strategy.select_elevator(direction, floor_number, self.registry)
        self._publish('scheduler/assigned', {
            'elevator': elevator.elevator_id,
            'floor': floor_number,
            'direction': direction.name,
            'request': request_kind,
        })
        return encode_elevator_dispatch(floor_number, elevator.port, self.peer_host)

    def route_status_update(self, update: ElevatorStatusUpdate) -> Datagram:
        """Reply packet carrying an elevator status code to the floor that asked for it"""
        port = update.reply_port + self.port_offset
        self._publish('scheduler/forwarded', {'status': update.status_code, 'port': port})
        return encode_floor_update(update.status_code, port, self.peer_host)

    def send(self, reply: Datagram):
        logger.info("Sending packet to port %d containing %s", reply.port, list(reply.payload))
        self.transport.send(reply)
        self._publish('scheduler/sent', {'port': reply.port, 'data': list(reply.payload)})

    def _log_received(self, datagram: Datagram):
        sender = 'Elevator' if self._is_status_update(datagram.payload) else 'Floor'
        logger.info("Packet received from %s port %d containing %s",
                    sender, datagram.port, list(datagram.payload))
        self._publish('scheduler/received', {
            'sender': sender,
            'port': datagram.port,
            'data': list(datagram.payload),
        })

    def _reject(self, datagram: Datagram, error):
        logger.warning("Rejected packet (length %d) from port %d containing %s: %s",
                       datagram.length, datagram.port, list(datagram.payload), error.message)
        self._publish('scheduler/rejected', {
            'port': datagram.port,
            'data': list(datagram.payload),
            'error': type(error).__name__,
            'reason': error.message,
        })

    @staticmethod
    def _is_status_update(payload: bytes) -> bool:
        return len(payload) == 2 and payload[1] != 0

    def _publish(self, topic: str, message: dict):
        if self.broker is not None:
            self.broker.put(topic, message)
