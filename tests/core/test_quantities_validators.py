import pytest

from hvac_engine.core.enums import ProcessMode, ProcessType
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
from hvac_engine.core.quantities import Power, RelativeHumidity, Temperature, target_to_dict
from hvac_engine.core.validators import (
    require_between,
    require_finite,
    require_non_negative,
    require_not_none,
)


def test_power_from_kilowatts():
    assert Power.of_kilowatts(2.5) == Power(2500.0)


@pytest.mark.parametrize("factory", [Power, Temperature, RelativeHumidity])
def test_targets_reject_non_finite_values(factory):
    """Test that NaN and infinity are rejected for every target type."""
    with pytest.raises(InvalidArgumentError):
        factory(float('nan'))
    with pytest.raises(InvalidArgumentError):
        factory(float('inf'))
    with pytest.raises(MissingArgumentError):
        factory(None)


def test_target_serialization():
    assert target_to_dict(Power(-500.0)) == {'kind': 'power', 'value': -500.0, 'units': 'W'}
    assert target_to_dict(Temperature(25.0))['kind'] == 'temperature'
    assert target_to_dict(RelativeHumidity(30.0)) == {
        'kind': 'relative_humidity', 'value': 30.0, 'units': '%'}


def test_require_between_reports_range():
    """Test that range errors name the quantity, value and bounds."""
    assert require_between(5.0, 0.0, 10.0, "Flow") == 5.0
    with pytest.raises(InvalidArgumentError, match=r"Flow = 11.0 kg/s .*\[0.0, 10.0\]"):
        require_between(11.0, 0.0, 10.0, "Flow", "kg/s")


def test_basic_validators():
    assert require_not_none(0.0, "x") == 0.0
    assert require_finite(1.5, "x") == 1.5
    assert require_non_negative(0.0, "x") == 0.0

    with pytest.raises(MissingArgumentError, match="x must be provided"):
        require_not_none(None, "x")
    with pytest.raises(InvalidArgumentError, match="cannot be negative"):
        require_non_negative(-1e-9, "x")


def test_exception_hierarchy():
    """Test that every engine error derives from HvacEngineError."""
    for error in (MissingArgumentError, InvalidArgumentError, SolutionNotConvergedError,
                  PipelineUsageError, ConfigurationError):
        assert issubclass(error, HvacEngineError)
    assert issubclass(DuplicateBlockError, PipelineUsageError)
    assert issubclass(BlockNotFoundError, PipelineUsageError)


def test_not_converged_error_carries_diagnostics():
    error = SolutionNotConvergedError("failed", solver_name="CoolingFromPower",
                                      x=12.0, residual=3.5, target=-1000.0)
    assert str(error) == "failed"
    assert error.solver_name == "CoolingFromPower"
    assert (error.x, error.residual, error.target) == (12.0, 3.5, -1000.0)


def test_process_enums():
    assert {t.name for t in ProcessType} == {'MIXING', 'HEATING', 'COOLING'}
    assert ProcessMode.FROM_HUMIDITY in ProcessMode
