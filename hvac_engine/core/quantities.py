"""
Typed process targets.

Heating and cooling strategies are selected by the type of their target, so a
bare float is not enough: ``Power(5000.0)`` and ``Temperature(25.0)`` lead to
different variants. Units are fixed per type (W, degC, %).
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

from hvac_engine.core.validators import require_finite


@dataclass(frozen=True)
class Power:
    """Heat flow in W. Positive adds heat to the air, negative removes it."""
    watts: float

    def __post_init__(self):
        require_finite(self.watts, "Power")

    @classmethod
    def of_kilowatts(cls, kilowatts: float) -> 'Power':
        require_finite(kilowatts, "Power")
        return cls(kilowatts * 1000.0)


@dataclass(frozen=True)
class Temperature:
    """Dry bulb temperature in degC."""
    celsius: float

    def __post_init__(self):
        require_finite(self.celsius, "Temperature")


@dataclass(frozen=True)
class RelativeHumidity:
    """Relative humidity in percent."""
    percent: float

    def __post_init__(self):
        require_finite(self.percent, "Relative humidity")


ProcessTarget = Union[Power, Temperature, RelativeHumidity]


def target_to_dict(target: ProcessTarget) -> Dict[str, Any]:
    """Serialize a target as ``{'kind': ..., 'value': ..., 'units': ...}``."""
    if isinstance(target, Power):
        return {'kind': 'power', 'value': target.watts, 'units': 'W'}
    if isinstance(target, Temperature):
        return {'kind': 'temperature', 'value': target.celsius, 'units': 'degC'}
    return {'kind': 'relative_humidity', 'value': target.percent, 'units': '%'}
