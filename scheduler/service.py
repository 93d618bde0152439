"""
Scheduler service

Owns the socket, the registry and the allocation strategy for one
scheduler process. The handshake runs synchronously on the caller's
thread; the dispatch loop then runs on one dedicated worker thread.
"""

import logging
import threading
import time
from typing import Optional

from config.scheduler import SchedulerConfig
from group_control import get_strategy
from group_control.interfaces.allocation_strategy import IAllocationStrategy
from .core.registry import Registry
from .dispatch import DispatchLoop
from .handshake import BootstrapHandshake
from .infrastructure.message_broker import MessageBroker
from .infrastructure.transport import UdpTransport

logger = logging.getLogger(__name__)


class SchedulerService:
    """
    The scheduler process as an explicit object

    Args:
        config: Scheduler configuration (defaults when omitted)
        transport: Datagram transport; a UdpTransport bound to
            config.network.port is created when omitted
        strategy: Allocation strategy; built from config when omitted
        broker: Message broker for telemetry events

    Usage:
        with SchedulerService(config) as service:
            service.start()
            service.wait()
    """

    def __init__(self, config: Optional[SchedulerConfig] = None, transport=None,
                 strategy: Optional[IAllocationStrategy] = None,
                 broker: Optional[MessageBroker] = None):
        self.config = config or SchedulerConfig()
        network = self.config.network

        if strategy is None:
            strategy = get_strategy(self.config.allocation_strategy.name,
                                    **self.config.allocation_strategy.parameters)
        if transport is None:
            transport = UdpTransport(network.port, host=network.host, buffer_size=network.buffer_size)

        self.transport = transport
        self.strategy = strategy
        self.broker = broker or MessageBroker()
        self.registry = Registry()

        self.handshake = BootstrapHandshake(
            transport, self.registry, broker=self.broker,
            port_offset=network.port_offset, timeout=self.config.startup.timeout,
        )
        self.dispatch_loop = DispatchLoop(
            transport, self.registry, strategy, broker=self.broker,
            port_offset=network.port_offset, peer_host=network.peer_host,
            poll_interval=network.poll_interval,
        )
        self._worker: Optional[threading.Thread] = None
        self._worker_error: Optional[BaseException] = None

        logger.info("Scheduler using strategy: %s", self.strategy.get_strategy_name())

    def bootstrap(self) -> Registry:
        """
        Run the handshake and log what registered

        Raises:
            StartupTimeout: If floors or elevators never finish announcing
        """
        self.handshake.run()
        for line in self.registry.describe():
            logger.info(line)
        return self.registry

    def start(self):
        """Bootstrap, wait the configured start delay, then launch the dispatch worker"""
        if self._worker is not None:
            raise RuntimeError("Scheduler already started")
        if not self.handshake.is_complete:
            self.bootstrap()

        delay = self.config.startup.dispatch_start_delay
        if delay > 0:
            logger.info("Starting dispatch in %.1fs", delay)
            time.sleep(delay)

        self._worker = threading.Thread(target=self._run_dispatch, name="scheduler-dispatch", daemon=True)
        self._worker.start()

    def _run_dispatch(self):
        try:
            self.dispatch_loop.run()
        except Exception as e:
            logger.exception("Dispatch loop terminated: %s", e)
            self._worker_error = e
        finally:
            self.transport.close()

    @property
    def running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    def wait(self, timeout: Optional[float] = None):
        """
        Join the dispatch worker

        Raises:
            Whatever error terminated the dispatch loop
        """
        if self._worker is not None:
            self._worker.join(timeout)
        if self._worker_error is not None:
            raise self._worker_error

    def stop(self, timeout: Optional[float] = None):
        """Signal the dispatch loop, join the worker and release the socket"""
        self.dispatch_loop.stop()
        if self._worker is not None:
            self._worker.join(timeout)
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, type, value, traceback):
        self.stop()
