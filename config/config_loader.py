"""
Configuration loader utility

Loads SchedulerConfig from YAML files.
"""

import yaml
from pathlib import Path
from typing import Union

from .scheduler import SchedulerConfig


class ConfigLoader:
    """Utility class for loading configuration files"""

    @staticmethod
    def load_scheduler(file_path: Union[str, Path]) -> SchedulerConfig:
        """
        Load SchedulerConfig from YAML file

        Args:
            file_path: Path to YAML file

        Returns:
            SchedulerConfig instance

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If validation fails
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {file_path}")

        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        config = SchedulerConfig.from_dict(data)
        config.validate()

        return config

    @staticmethod
    def save_scheduler(config: SchedulerConfig, file_path: Union[str, Path]):
        """
        Save SchedulerConfig to YAML file

        Args:
            config: SchedulerConfig instance
            file_path: Path to save YAML file
        """
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        data = config.to_dict()

        with open(file_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)


# Convenience functions
def load_scheduler_config(file_path: Union[str, Path]) -> SchedulerConfig:
    """Load SchedulerConfig from YAML file"""
    return ConfigLoader.load_scheduler(file_path)


def save_scheduler_config(config: SchedulerConfig, file_path: Union[str, Path]):
    """Save SchedulerConfig to YAML file"""
    ConfigLoader.save_scheduler(config, file_path)
