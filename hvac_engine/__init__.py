"""
Humid Air Process Engine - Main Package

Thermodynamic states of humid air chained into multi-stage processes used in
HVAC design:
- Property correlations of dry air, water vapour, liquid water and ice
- Immutable humid air states and flows
- Heating, dry cooling, coil cooling with condensate and mixing strategies
- Brent root finder for implicit targets (outlet RH, cooling power, mixed temperature)
- Process blocks chained through single-slot connectors into pipelines
- Configuration-driven pipelines (YAML/JSON) and the ``hvac-run`` CLI
"""

__version__ = "1.0.0"
__author__ = "HVAC Engine Team"

from hvac_engine.core.enums import ProcessMode, ProcessType, VapourStatus
from hvac_engine.core.exceptions import (
    BlockNotFoundError,
    ConfigurationError,
    DuplicateBlockError,
    HvacEngineError,
    InvalidArgumentError,
    MissingArgumentError,
    PipelineUsageError,
    SolutionNotConvergedError,
)
from hvac_engine.core.quantities import Power, RelativeHumidity, Temperature
from hvac_engine.core.stream import HumidAirFlow, HumidAirState, LiquidWaterFlow
from hvac_engine.processes import (
    CoolantData,
    CoolingResult,
    CoolingStrategy,
    DryCoolingResult,
    DryCoolingStrategy,
    HeatingResult,
    HeatingStrategy,
    MixingResult,
    MixingStrategy,
    MixingToTemperature,
)
from hvac_engine.solver import BrentRootFinder, RootSolution
from hvac_engine.components import (
    CoolingBlock,
    DryCoolingBlock,
    FlowSource,
    HeatingBlock,
    MixingBlock,
    MixingToTemperatureBlock,
)
from hvac_engine.simulation import ProcessPipeline

__all__ = [
    # Enums
    'ProcessMode',
    'ProcessType',
    'VapourStatus',

    # Exceptions
    'HvacEngineError',
    'MissingArgumentError',
    'InvalidArgumentError',
    'SolutionNotConvergedError',
    'PipelineUsageError',
    'DuplicateBlockError',
    'BlockNotFoundError',
    'ConfigurationError',

    # Data model
    'Power',
    'Temperature',
    'RelativeHumidity',
    'HumidAirState',
    'HumidAirFlow',
    'LiquidWaterFlow',
    'CoolantData',

    # Processes
    'HeatingStrategy',
    'DryCoolingStrategy',
    'CoolingStrategy',
    'MixingStrategy',
    'MixingToTemperature',
    'HeatingResult',
    'DryCoolingResult',
    'CoolingResult',
    'MixingResult',

    # Solver
    'BrentRootFinder',
    'RootSolution',

    # Blocks and pipeline
    'HeatingBlock',
    'CoolingBlock',
    'DryCoolingBlock',
    'MixingBlock',
    'MixingToTemperatureBlock',
    'FlowSource',
    'ProcessPipeline',
]
