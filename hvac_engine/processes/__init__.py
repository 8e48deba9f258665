"""
Process strategies: heating, dry cooling, coil cooling and mixing.

Each family exposes a factory (``HeatingStrategy.of`` etc.) selecting the
variant by the type of the target, and module level functions implementing
the underlying equations.
"""

from hvac_engine.processes.base import ProcessStrategy
from hvac_engine.processes.coolant import CoolantData
from hvac_engine.processes.cooling import (
    CoolingStrategy, CoolingFromPower, CoolingFromTemperature, CoolingFromRelativeHumidity,
)
from hvac_engine.processes.dry_cooling import (
    DryCoolingStrategy, DryCoolingFromPower, DryCoolingFromTemperature,
)
from hvac_engine.processes.heating import (
    HeatingStrategy, HeatingFromPower, HeatingFromTemperature, HeatingFromRelativeHumidity,
)
from hvac_engine.processes.mixing import (
    MixingStrategy, MixingOfTwoFlows, MixingOfMultipleFlows, MixingToTemperature,
)
from hvac_engine.processes.results import (
    CoolingResult, DryCoolingResult, HeatingResult, MixingResult, ProcessResult,
)

__all__ = [
    'ProcessStrategy',
    'CoolantData',
    'CoolingStrategy', 'CoolingFromPower', 'CoolingFromTemperature', 'CoolingFromRelativeHumidity',
    'DryCoolingStrategy', 'DryCoolingFromPower', 'DryCoolingFromTemperature',
    'HeatingStrategy', 'HeatingFromPower', 'HeatingFromTemperature', 'HeatingFromRelativeHumidity',
    'MixingStrategy', 'MixingOfTwoFlows', 'MixingOfMultipleFlows', 'MixingToTemperature',
    'CoolingResult', 'DryCoolingResult', 'HeatingResult', 'MixingResult', 'ProcessResult',
]
