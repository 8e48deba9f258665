import json
from pathlib import Path

import pytest

from hvac_engine.config.loaders import ConfigLoader, load_pipeline_config
from hvac_engine.config.pipeline_config import (
    BlockConfig,
    FlowConfig,
    PipelineConfig,
    SolverConfig,
    TargetConfig,
)
from hvac_engine.core.exceptions import ConfigurationError

EXAMPLE_CONFIG = Path(__file__).parents[2] / "configs" / "ahu_summer.yaml"


def minimal_config():
    return {
        'name': 'Heater only',
        'inlet': {'temperature_c': 10.0, 'relative_humidity_pct': 60.0, 'mass_flow_kg_s': 1.0},
        'blocks': [
            {'id': 'heater', 'type': 'heating', 'target': {'temperature_c': 30.0}},
        ],
    }


def test_load_yaml_configuration():
    """Test loading the bundled summer air handling unit example."""
    config = load_pipeline_config(EXAMPLE_CONFIG)

    assert config.name == "AHU summer"
    assert config.inlet.volumetric_flow_m3_h == 1000.0
    assert config.inlet.pressure_pa == 101325.0
    assert [b.type for b in config.blocks] == ['mixing', 'cooling', 'heating']
    assert config.blocks[1].coolant.return_temperature_c == 14.0
    assert config.blocks[1].target.kind == 'temperature'
    assert config.blocks[2].target.kind == 'relative_humidity'
    assert config.solver.max_iterations == 100


def test_load_json_configuration(tmp_path):
    config_file = tmp_path / "heater.json"
    config_file.write_text(json.dumps(minimal_config()))

    config = load_pipeline_config(config_file)

    assert config.name == 'Heater only'
    assert config.version == '1.0'
    assert config.inlet.mass_flow_kg_s == 1.0
    assert config.blocks[0].target.temperature_c == 30.0
    assert config.solver == SolverConfig()


def test_load_nonexistent_file():
    with pytest.raises(ConfigurationError, match="not found"):
        load_pipeline_config("nonexistent.yaml")


def test_load_invalid_yaml(tmp_path):
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("name: [unclosed\n")

    with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
        load_pipeline_config(config_file)


def test_unsupported_file_format(tmp_path):
    config_file = tmp_path / "pipeline.toml"
    config_file.write_text("name = 'x'\n")

    with pytest.raises(ConfigurationError, match="Unsupported file format"):
        load_pipeline_config(config_file)


@pytest.mark.parametrize("mutate, location", [
    (lambda d: d.pop('inlet'), "<root>"),
    (lambda d: d['inlet'].update(volumetric_flow_m3_h=500.0), "inlet"),
    (lambda d: d['inlet'].update(relative_humidity_pct=120.0), "inlet/relative_humidity_pct"),
    (lambda d: d['blocks'][0].update(type='humidifier'), "blocks/0/type"),
    (lambda d: d['blocks'][0]['target'].update(power_w=1000.0), "blocks/0/target"),
    (lambda d: d.update(blocks=[]), "blocks"),
    (lambda d: d.update(solver={'max_iterations': 0}), "solver/max_iterations"),
])
def test_schema_validation_errors(mutate, location):
    config_dict = minimal_config()
    mutate(config_dict)

    with pytest.raises(ConfigurationError, match=f"Schema validation failed at {location}"):
        ConfigLoader().load_dict(config_dict)


def test_non_mapping_configuration_is_rejected():
    with pytest.raises(ConfigurationError, match="must be a mapping"):
        ConfigLoader().load_dict(["not", "a", "mapping"])


@pytest.mark.parametrize("block, message", [
    ({'id': 'coil', 'type': 'cooling', 'target': {'temperature_c': 20.0}}, "requires coolant"),
    ({'id': 'coil', 'type': 'cooling', 'target': {'temperature_c': 20.0},
      'coolant': {'supply_temperature_c': 14.0, 'return_temperature_c': 7.0}}, "must not exceed"),
    ({'id': 'heater', 'type': 'heating'}, "requires a target"),
    ({'id': 'cooler', 'type': 'dry_cooling', 'target': {'relative_humidity_pct': 60.0}},
     "power or temperature"),
    ({'id': 'mix', 'type': 'mixing'}, "at least one recirculation"),
    ({'id': 'mix', 'type': 'mixing_to_temperature', 'target': {'power_w': 10.0},
      'recirculation': [{'temperature_c': 20.0, 'relative_humidity_pct': 50.0,
                         'mass_flow_kg_s': 1.0}]}, "requires a temperature target"),
    ({'id': 'mix', 'type': 'mixing_to_temperature', 'target': {'temperature_c': 20.0}},
     "exactly one recirculation"),
])
def test_semantic_validation_errors(block, message):
    """Test checks that the schema alone cannot express."""
    config_dict = minimal_config()
    config_dict['blocks'] = [block]

    with pytest.raises(ConfigurationError, match=message):
        ConfigLoader().load_dict(config_dict)


def test_duplicate_block_ids_are_rejected():
    config_dict = minimal_config()
    config_dict['blocks'].append(dict(config_dict['blocks'][0]))

    with pytest.raises(ConfigurationError, match="Duplicate block ids"):
        ConfigLoader().load_dict(config_dict)


def test_missing_schema_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Could not load schema"):
        ConfigLoader(schema_path=tmp_path / "missing.json")


def test_dataclass_validation_raises_value_error():
    with pytest.raises(ValueError, match="exactly one"):
        TargetConfig().validate()
    with pytest.raises(ValueError, match="Exactly one"):
        FlowConfig(20.0, 50.0).validate()
    with pytest.raises(ValueError, match="positive"):
        SolverConfig(accuracy=0.0).validate()
    with pytest.raises(ValueError, match="at least one block"):
        PipelineConfig('empty', FlowConfig(20.0, 50.0, mass_flow_kg_s=1.0), []).validate()
    with pytest.raises(ValueError, match="unknown type"):
        BlockConfig('x', 'humidifier').validate()
