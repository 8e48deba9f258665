"""
PipelineBuilder: Factory for configuration-driven pipeline assembly.

Turns a validated PipelineConfig into a ProcessPipeline with its blocks added
in configuration order and the inlet flow connected.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from hvac_engine.components.cooling import CoolingBlock, DryCoolingBlock
from hvac_engine.components.heating import HeatingBlock
from hvac_engine.components.mixing import MixingBlock, MixingToTemperatureBlock
from hvac_engine.config.loaders import ConfigLoader, load_pipeline_config
from hvac_engine.config.pipeline_config import BlockConfig, FlowConfig, PipelineConfig, TargetConfig
from hvac_engine.core.component import ProcessBlock
from hvac_engine.core.exceptions import ConfigurationError, HvacEngineError
from hvac_engine.core.quantities import Power, ProcessTarget, RelativeHumidity, Temperature
from hvac_engine.core.stream import HumidAirFlow, HumidAirState
from hvac_engine.processes.coolant import CoolantData
from hvac_engine.simulation.pipeline import ProcessPipeline
from hvac_engine.solver.root_finder import BrentRootFinder

logger = logging.getLogger(__name__)


class PipelineBuilder:
    """
    Factory for building process pipelines from configuration.

    Example:
        # From configuration file
        builder = PipelineBuilder.from_file("configs/ahu_summer.yaml")
        result = builder.pipeline.run()

        # From PipelineConfig object
        builder = PipelineBuilder.from_config(config)
    """

    def __init__(self, config: PipelineConfig):
        self.config = config
        self.pipeline = ProcessPipeline(config.name)
        self.solver = BrentRootFinder(
            accuracy=config.solver.accuracy,
            max_iterations=config.solver.max_iterations,
            bracket_search_cycles=config.solver.bracket_search_cycles,
        )

    @classmethod
    def from_file(cls, config_path: Path | str) -> 'PipelineBuilder':
        """Build pipeline from a YAML or JSON configuration file."""
        config = load_pipeline_config(config_path)
        builder = cls(config)
        builder.build()
        return builder

    @classmethod
    def from_config(cls, config: PipelineConfig) -> 'PipelineBuilder':
        """Build pipeline from a PipelineConfig object."""
        try:
            config.validate()
        except ValueError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}")
        builder = cls(config)
        builder.build()
        return builder

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'PipelineBuilder':
        """Build pipeline from a configuration dictionary (schema-validated)."""
        config = ConfigLoader().load_dict(config_dict)
        builder = cls(config)
        builder.build()
        return builder

    def build(self) -> ProcessPipeline:
        """
        Create every block and connect the inlet.

        Raises:
            ConfigurationError: If a flow or block cannot be created from its
                configured values.
        """
        for block_config in self.config.blocks:
            try:
                block = self._build_block(block_config)
            except HvacEngineError as e:
                raise ConfigurationError(f"Block '{block_config.id}': {e}") from e
            self.pipeline.add_block(block)

        try:
            inlet_flow = _build_flow(self.config.inlet)
        except HvacEngineError as e:
            raise ConfigurationError(f"Inlet flow: {e}") from e
        self.pipeline.connect_inlet(inlet_flow)

        logger.info(f"Built pipeline '{self.config.name}' with {len(self.pipeline)} blocks")
        return self.pipeline

    def _build_block(self, cfg: BlockConfig) -> ProcessBlock:
        if cfg.type == 'heating':
            return HeatingBlock(cfg.id, _build_target(cfg.target))
        if cfg.type == 'cooling':
            coolant = CoolantData(cfg.coolant.supply_temperature_c, cfg.coolant.return_temperature_c)
            return CoolingBlock(cfg.id, coolant, _build_target(cfg.target), self.solver)
        if cfg.type == 'dry_cooling':
            return DryCoolingBlock(cfg.id, _build_target(cfg.target))
        if cfg.type == 'mixing':
            return MixingBlock(cfg.id, [_build_flow(f) for f in cfg.recirculation])
        if cfg.type == 'mixing_to_temperature':
            return MixingToTemperatureBlock(
                cfg.id, Temperature(cfg.target.temperature_c),
                recirculation_flow=_build_flow(cfg.recirculation[0]),
                dry_air_mass_flow_kg_s=cfg.dry_air_mass_flow_kg_s,
                min_inlet_dry_air_kg_s=cfg.min_inlet_dry_air_kg_s,
                min_recirculation_dry_air_kg_s=cfg.min_recirculation_dry_air_kg_s,
                solver=self.solver,
            )
        raise ConfigurationError(f"Unknown block type: {cfg.type}")


def _build_flow(cfg: FlowConfig) -> HumidAirFlow:
    if cfg.volumetric_flow_m3_h is not None:
        return HumidAirFlow.of_values(cfg.temperature_c, cfg.relative_humidity_pct,
                                      cfg.volumetric_flow_m3_h, cfg.pressure_pa)
    state = HumidAirState.from_relative_humidity(cfg.temperature_c, cfg.relative_humidity_pct,
                                                 cfg.pressure_pa)
    return HumidAirFlow(state, cfg.mass_flow_kg_s)


def _build_target(cfg: TargetConfig) -> ProcessTarget:
    if cfg.kind == 'power':
        return Power(cfg.power_w)
    if cfg.kind == 'temperature':
        return Temperature(cfg.temperature_c)
    return RelativeHumidity(cfg.relative_humidity_pct)
