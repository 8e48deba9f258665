import pytest

from hvac_engine.core.enums import ProcessMode, ProcessType
from hvac_engine.core.exceptions import InvalidArgumentError
from hvac_engine.core.quantities import Power, RelativeHumidity, Temperature
from hvac_engine.processes.dry_cooling import DryCoolingStrategy, dry_cooling_power_limit_w
from hvac_engine.processes.heating import HeatingStrategy


def test_dry_cooling_from_temperature(summer_inlet):
    result = DryCoolingStrategy.of(summer_inlet, Temperature(25.0)).apply()

    assert result.process_type == ProcessType.COOLING
    assert result.process_mode == ProcessMode.FROM_TEMPERATURE
    assert result.outlet_flow.temperature_c == 25.0
    assert result.outlet_flow.humidity_ratio == summer_inlet.humidity_ratio
    assert result.heat_of_process_w == pytest.approx(-9287.469123327497, rel=5e-3)


def test_dry_cooling_from_power_inverts_temperature_variant(summer_inlet):
    heat = DryCoolingStrategy.of(summer_inlet, Temperature(25.0)).apply().heat_of_process_w
    result = DryCoolingStrategy.of(summer_inlet, Power(heat)).apply()

    assert result.process_mode == ProcessMode.FROM_POWER
    assert result.heat_of_process_w == heat
    assert result.outlet_flow.temperature_c == pytest.approx(25.0, abs=1e-8)
    assert result.outlet_flow.humidity_ratio == summer_inlet.humidity_ratio


def test_heating_then_dry_cooling_round_trip(summer_inlet):
    """Test that +Q followed by -Q returns the inlet dry bulb temperature."""
    heated = HeatingStrategy.of(summer_inlet, Power(8000.0)).apply().outlet_flow
    cooled = DryCoolingStrategy.of(heated, Power(-8000.0)).apply().outlet_flow

    assert cooled.temperature_c == pytest.approx(summer_inlet.temperature_c, abs=1e-8)
    assert cooled.dry_air_mass_flow_kg_s == pytest.approx(summer_inlet.dry_air_mass_flow_kg_s)


def test_zero_power_leaves_air_unchanged(summer_inlet):
    result = DryCoolingStrategy.of(summer_inlet, Power(0.0)).apply()
    assert result.outlet_flow is summer_inlet
    assert result.heat_of_process_w == 0.0


def test_power_limit_reaches_dew_point(summer_inlet):
    limit = dry_cooling_power_limit_w(summer_inlet)
    result = DryCoolingStrategy.of(summer_inlet, Power(limit)).apply()

    assert limit < 0.0
    assert result.outlet_flow.temperature_c == pytest.approx(summer_inlet.state.dew_point_c, abs=1e-6)


@pytest.mark.parametrize("target, message", [
    (Temperature(40.0), "cannot be increased"),
    (Temperature(10.0), "below the dew point"),
    (Power(500.0), "must be a negative value"),
    (Power(-50_000.0), "below its dew point"),
])
def test_dry_cooling_target_validation(summer_inlet, target, message):
    with pytest.raises(InvalidArgumentError, match=message):
        DryCoolingStrategy.of(summer_inlet, target)


def test_relative_humidity_target_is_unsupported(summer_inlet):
    with pytest.raises(InvalidArgumentError, match="Unsupported dry cooling target"):
        DryCoolingStrategy.of(summer_inlet, RelativeHumidity(60.0))
