"""
Scheduler Configuration

Network, startup, allocation, logging and monitoring settings for one
scheduler process.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Any, Optional


@dataclass
class NetworkConfig:
    """Datagram socket settings"""
    port: int = 64  # well-known scheduler port
    host: str = ""  # bind address ("" = all interfaces)
    peer_host: str = "localhost"  # replies go to peers on this host
    port_offset: int = 0  # added to ports carried in one payload byte
    buffer_size: int = 3  # bytes; longer datagrams are truncated
    poll_interval: float = 0.5  # seconds between stop checks

    def __post_init__(self):
        if not (0 <= self.port <= 65535):
            raise ValueError("network.port must be between 0 and 65535")
        if not (0 <= self.port_offset <= 65535 - 255):
            raise ValueError("network.port_offset must leave room for a one-byte port")
        if self.buffer_size < 3:
            raise ValueError("network.buffer_size must be at least 3")
        if self.poll_interval <= 0:
            raise ValueError("network.poll_interval must be positive")


@dataclass
class StartupConfig:
    """Bootstrap handshake settings"""
    timeout: Optional[float] = 60.0  # seconds; None waits forever
    dispatch_start_delay: float = 3.0  # seconds between handshake and dispatch

    def __post_init__(self):
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("startup.timeout must be positive or null")
        if self.dispatch_start_delay < 0:
            raise ValueError("startup.dispatch_start_delay cannot be negative")


@dataclass
class AllocationStrategyConfig:
    """Configuration for elevator allocation strategy"""
    name: str = "FirstRegistered"
    parameters: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            raise ValueError("allocation_strategy.name cannot be empty")


@dataclass
class LoggingConfig:
    level: str = "INFO"
    format: str = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

    def __post_init__(self):
        if not isinstance(logging.getLevelName(self.level.upper()), int):
            raise ValueError(f"logging.level '{self.level}' is not a logging level")


@dataclass
class MonitorConfig:
    """Live monitor (websocket) and event log settings"""
    enabled: bool = False
    host: str = "localhost"
    port: int = 8765
    event_log: Optional[str] = None  # JSON Lines output path

    def __post_init__(self):
        if not (0 <= self.port <= 65535):
            raise ValueError("monitor.port must be between 0 and 65535")


@dataclass
class SchedulerConfig:
    """
    Complete scheduler configuration

    Every section has defaults, so an empty file (or no file) gives a
    working scheduler on port 64 with the baseline strategy.
    """
    network: NetworkConfig = field(default_factory=NetworkConfig)
    startup: StartupConfig = field(default_factory=StartupConfig)
    allocation_strategy: AllocationStrategyConfig = field(default_factory=AllocationStrategyConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    monitor: MonitorConfig = field(default_factory=MonitorConfig)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'SchedulerConfig':
        """Create SchedulerConfig from dictionary"""
        data = data or {}
        sched_data = data.get('scheduler', data) or {}

        network = NetworkConfig(**sched_data.get('network', {}))
        startup = StartupConfig(**sched_data.get('startup', {}))

        alloc_data = sched_data.get('allocation_strategy', {})
        allocation_strategy = AllocationStrategyConfig(
            name=alloc_data.get('name', 'FirstRegistered'),
            parameters=alloc_data.get('parameters', {}) or {}
        )

        logging_config = LoggingConfig(**sched_data.get('logging', {}))
        monitor = MonitorConfig(**sched_data.get('monitor', {}))

        return cls(
            network=network,
            startup=startup,
            allocation_strategy=allocation_strategy,
            logging=logging_config,
            monitor=monitor
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            'scheduler': {
                'network': {
                    'port': self.network.port,
                    'host': self.network.host,
                    'peer_host': self.network.peer_host,
                    'port_offset': self.network.port_offset,
                    'buffer_size': self.network.buffer_size,
                    'poll_interval': self.network.poll_interval
                },
                'startup': {
                    'timeout': self.startup.timeout,
                    'dispatch_start_delay': self.startup.dispatch_start_delay
                },
                'allocation_strategy': {
                    'name': self.allocation_strategy.name,
                    'parameters': self.allocation_strategy.parameters
                },
                'logging': {
                    'level': self.logging.level,
                    'format': self.logging.format
                },
                'monitor': {
                    'enabled': self.monitor.enabled,
                    'host': self.monitor.host,
                    'port': self.monitor.port,
                    'event_log': self.monitor.event_log
                }
            }
        }

    def validate(self):
        """Validate configuration consistency"""
        # Imported here so loading a config does not pull in the strategies
        from group_control import STRATEGY_REGISTRY

        if self.allocation_strategy.name not in STRATEGY_REGISTRY:
            raise ValueError(
                f"allocation_strategy.name '{self.allocation_strategy.name}' is not one of "
                f"{', '.join(STRATEGY_REGISTRY)}"
            )
        if self.monitor.enabled and self.monitor.port == self.network.port:
            raise ValueError("monitor.port must differ from network.port")
