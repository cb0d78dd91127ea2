"""
Configuration management package

Provides configuration classes for door controllers and simulation scenarios.
"""

from .door import (
    AutoDoorConfig,
    ConfigurationError,
    DoorDirection,
    SharedParameters,
    ELEVATOR_DOMAIN_SPACE_PARAM,
    parse_elevator_ref_num
)

from .scenario import (
    ScenarioConfig,
    BuildingConfig,
    CarConfig,
    DoorCommandEvent
)

from .config_loader import (
    ConfigLoader,
    load_scenario_config,
    load_door_config,
    save_scenario_config
)

__all__ = [
    # Door
    'AutoDoorConfig',
    'ConfigurationError',
    'DoorDirection',
    'SharedParameters',
    'ELEVATOR_DOMAIN_SPACE_PARAM',
    'parse_elevator_ref_num',

    # Scenario
    'ScenarioConfig',
    'BuildingConfig',
    'CarConfig',
    'DoorCommandEvent',

    # Loader
    'ConfigLoader',
    'load_scenario_config',
    'load_door_config',
    'save_scenario_config',
]
