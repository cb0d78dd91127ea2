"""
Configuration loader utility

Loads ScenarioConfig and standalone door plugin settings from YAML files.
"""

import yaml
from pathlib import Path
from typing import Union

from .door import AutoDoorConfig
from .scenario import ScenarioConfig


class ConfigLoader:
    """Utility class for loading configuration files"""

    @staticmethod
    def _read_yaml(file_path: Path) -> dict:
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {file_path}")

        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        return data or {}

    @staticmethod
    def load_scenario(file_path: Union[str, Path]) -> ScenarioConfig:
        """
        Load ScenarioConfig from YAML file

        Args:
            file_path: Path to YAML file

        Returns:
            ScenarioConfig instance

        Raises:
            FileNotFoundError: If file doesn't exist
            ConfigurationError: If a required door setting is missing
            ValueError: If validation fails
        """
        data = ConfigLoader._read_yaml(Path(file_path))

        config = ScenarioConfig.from_dict(data)
        config.validate()

        return config

    @staticmethod
    def load_door(file_path: Union[str, Path]) -> AutoDoorConfig:
        """
        Load a single door's plugin settings from YAML file

        The file may either hold the settings at top level or under a 'door' key.
        """
        file_path = Path(file_path)
        data = ConfigLoader._read_yaml(file_path)
        return AutoDoorConfig.from_dict(data.get('door', data), owner=file_path.stem)

    @staticmethod
    def save_scenario(config: ScenarioConfig, file_path: Union[str, Path]):
        """
        Save ScenarioConfig to YAML file

        Args:
            config: ScenarioConfig instance
            file_path: Path to save YAML file
        """
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        data = config.to_dict()

        with open(file_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)


# Convenience functions
def load_scenario_config(file_path: Union[str, Path]) -> ScenarioConfig:
    """Load ScenarioConfig from YAML file"""
    return ConfigLoader.load_scenario(file_path)


def load_door_config(file_path: Union[str, Path]) -> AutoDoorConfig:
    """Load AutoDoorConfig from YAML file"""
    return ConfigLoader.load_door(file_path)


def save_scenario_config(config: ScenarioConfig, file_path: Union[str, Path]):
    """Save ScenarioConfig to YAML file"""
    ConfigLoader.save_scenario(config, file_path)
