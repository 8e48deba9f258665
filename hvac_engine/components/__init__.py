"""Process blocks and flow sources."""

from hvac_engine.components.cooling import CoolingBlock, DryCoolingBlock
from hvac_engine.components.heating import HeatingBlock
from hvac_engine.components.mixing import MixingBlock, MixingToTemperatureBlock
from hvac_engine.components.source import FlowSource

__all__ = [
    'CoolingBlock',
    'DryCoolingBlock',
    'HeatingBlock',
    'MixingBlock',
    'MixingToTemperatureBlock',
    'FlowSource',
]
