"""
High-Level Pipeline Runner Utilities.

Entry Points:
    - `run_pipeline_from_config()`: Single config file execution.
    - `main()`: CLI entry point (``hvac-run``).

Workflow:
    1. Load pipeline configuration from YAML/JSON.
    2. Build blocks and wire them via PipelineBuilder.
    3. Run the pipeline once.
    4. Log a per-block summary and optionally write results as JSON.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from hvac_engine.config.pipeline_builder import PipelineBuilder
from hvac_engine.core.exceptions import HvacEngineError

logger = logging.getLogger(__name__)


def run_pipeline_from_config(
    config_path: Path | str,
    output_path: Optional[Path | str] = None
) -> Dict[str, Any]:
    """
    Run a complete pipeline from a configuration file.

    Args:
        config_path (Path | str): Path to pipeline configuration YAML/JSON.
        output_path (Path | str, optional): JSON file to write results to.

    Returns:
        Dict[str, Any]: Pipeline name, block states and summary rows.

    Example:
        >>> results = run_pipeline_from_config("configs/ahu_summer.yaml")
        >>> results['summary'][-1]['outlet_temperature_c']
    """
    logger.info(f"Running pipeline from config: {config_path}")
    builder = PipelineBuilder.from_file(config_path)
    pipeline = builder.pipeline
    pipeline.run()

    for row in pipeline.summary():
        logger.info(
            f"{row['block_id']:>16} | {row['process_type']:<7} {row['process_mode']:<16} | "
            f"T_out = {row['outlet_temperature_c']:8.3f} degC | "
            f"RH_out = {row['outlet_relative_humidity_pct']:7.3f} % | "
            f"Q = {row['heat_of_process_w']:11.1f} W"
        )

    results = pipeline.to_dict()
    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(results, f, indent=2)
        logger.info(f"Results saved to: {output_path}")

    return results


def main(argv: Optional[list] = None) -> int:
    """
    CLI entry point for command-line pipeline execution.

    Usage:
        hvac-run config.yaml --output results.json --log-level DEBUG
    """
    parser = argparse.ArgumentParser(description="Run a humid air process pipeline.")
    parser.add_argument("config_file", type=str, help="Path to the pipeline configuration YAML/JSON file.")
    parser.add_argument("--output", type=str, default=None, help="JSON file for pipeline results.")
    parser.add_argument("--log-level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level.")

    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        run_pipeline_from_config(config_path=args.config_file, output_path=args.output)
    except HvacEngineError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
