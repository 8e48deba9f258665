"""
Configuration loading with validation.

Supports YAML and JSON formats with JSON Schema validation.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
import yaml

from hvac_engine.config.pipeline_config import (
    BlockConfig,
    CoolantConfig,
    FlowConfig,
    PipelineConfig,
    SolverConfig,
    TargetConfig,
)
from hvac_engine.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).parent / "schemas" / "pipeline_schema_v1.json"


class ConfigLoader:
    """
    Configuration loader with schema validation.

    Example:
        loader = ConfigLoader()
        config = loader.load_yaml("configs/ahu_summer.yaml")
    """

    def __init__(self, schema_path: Optional[Path] = None):
        """
        Initialize configuration loader.

        Args:
            schema_path: Path to JSON schema file (uses the bundled schema if None)
        """
        self.schema_path = Path(schema_path) if schema_path is not None else DEFAULT_SCHEMA_PATH
        self.schema = self._load_schema()

    def _load_schema(self) -> Dict[str, Any]:
        """Load JSON schema from file."""
        try:
            with open(self.schema_path, 'r') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not load schema from {self.schema_path}: {e}")

    def load_yaml(self, config_path: Path | str) -> PipelineConfig:
        """
        Load configuration from YAML file.

        Raises:
            ConfigurationError: If file not found or validation fails
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r') as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML: {e}")

        return self.load_dict(config_dict)

    def load_json(self, config_path: Path | str) -> PipelineConfig:
        """Load configuration from JSON file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r') as f:
                config_dict = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Failed to parse JSON: {e}")

        return self.load_dict(config_dict)

    def load_dict(self, config_dict: Dict[str, Any]) -> PipelineConfig:
        """
        Convert dictionary to PipelineConfig with validation.

        Raises:
            ConfigurationError: If validation fails
        """
        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(config_dict).__name__}")

        try:
            jsonschema.validate(instance=config_dict, schema=self.schema)
            logger.debug("JSON schema validation passed")
        except jsonschema.ValidationError as e:
            location = "/".join(str(p) for p in e.absolute_path) or "<root>"
            raise ConfigurationError(f"Schema validation failed at {location}: {e.message}")

        try:
            config = self._build_pipeline_config(config_dict)
        except (KeyError, TypeError) as e:
            raise ConfigurationError(f"Failed to build PipelineConfig: {e}")

        try:
            config.validate()
        except ValueError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}")

        logger.info(f"Loaded configuration: {config.name} v{config.version} "
                    f"({len(config.blocks)} blocks)")
        return config

    def _build_pipeline_config(self, d: Dict[str, Any]) -> PipelineConfig:
        """Build PipelineConfig from dictionary (manual construction)."""
        blocks = []
        for b in d['blocks']:
            blocks.append(BlockConfig(
                id=b['id'],
                type=b['type'],
                target=TargetConfig(**b['target']) if 'target' in b else None,
                coolant=CoolantConfig(**b['coolant']) if 'coolant' in b else None,
                recirculation=[FlowConfig(**f) for f in b.get('recirculation', [])],
                dry_air_mass_flow_kg_s=b.get('dry_air_mass_flow_kg_s'),
                min_inlet_dry_air_kg_s=b.get('min_inlet_dry_air_kg_s', 0.0),
                min_recirculation_dry_air_kg_s=b.get('min_recirculation_dry_air_kg_s', 0.0),
            ))

        return PipelineConfig(
            name=d['name'],
            version=str(d.get('version', '1.0')),
            inlet=FlowConfig(**d['inlet']),
            blocks=blocks,
            solver=SolverConfig(**d.get('solver', {})),
        )


def load_pipeline_config(config_path: Path | str) -> PipelineConfig:
    """
    Convenience function to load pipeline configuration.

    Automatically detects YAML or JSON based on file extension.

    Example:
        config = load_pipeline_config("configs/ahu_summer.yaml")
    """
    loader = ConfigLoader()
    config_path = Path(config_path)

    if config_path.suffix in ['.yaml', '.yml']:
        return loader.load_yaml(config_path)
    elif config_path.suffix == '.json':
        return loader.load_json(config_path)
    else:
        raise ConfigurationError(f"Unsupported file format: {config_path.suffix}")
