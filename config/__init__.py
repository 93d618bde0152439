"""
Configuration management package

Provides configuration classes for the scheduler process.
"""

from .scheduler import (
    SchedulerConfig,
    NetworkConfig,
    StartupConfig,
    AllocationStrategyConfig,
    LoggingConfig,
    MonitorConfig
)

from .config_loader import (
    ConfigLoader,
    load_scheduler_config,
    save_scheduler_config
)

__all__ = [
    # Scheduler
    'SchedulerConfig',
    'NetworkConfig',
    'StartupConfig',
    'AllocationStrategyConfig',
    'LoggingConfig',
    'MonitorConfig',

    # Loader
    'ConfigLoader',
    'load_scheduler_config',
    'save_scheduler_config',
]
