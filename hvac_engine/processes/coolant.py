"""Coolant supplied to a cooling coil."""

from dataclasses import dataclass
from typing import Any, Dict

from hvac_engine.core.constants import CoolantLimits
from hvac_engine.core.exceptions import InvalidArgumentError
from hvac_engine.core.validators import require_between


@dataclass(frozen=True)
class CoolantData:
    """
    Supply and return temperatures of the coil coolant, degC.

    The coil wall is represented by the mean of both temperatures.

    Raises:
        InvalidArgumentError: If a temperature is outside 0..90 degC or the
            supply is warmer than the return.
    """
    supply_temperature_c: float
    return_temperature_c: float

    def __post_init__(self):
        require_between(self.supply_temperature_c, CoolantLimits.TEMPERATURE_MIN_C,
                        CoolantLimits.TEMPERATURE_MAX_C, "Coolant supply temperature", "degC")
        require_between(self.return_temperature_c, CoolantLimits.TEMPERATURE_MIN_C,
                        CoolantLimits.TEMPERATURE_MAX_C, "Coolant return temperature", "degC")
        if self.supply_temperature_c > self.return_temperature_c:
            raise InvalidArgumentError(
                f"Coolant supply temperature {self.supply_temperature_c} degC must not "
                f"exceed return temperature {self.return_temperature_c} degC"
            )

    @property
    def average_temperature_c(self) -> float:
        return (self.supply_temperature_c + self.return_temperature_c) / 2.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'supply_temperature_c': self.supply_temperature_c,
            'return_temperature_c': self.return_temperature_c,
            'average_temperature_c': self.average_temperature_c,
        }
