"""Fixed flow sources feeding pipelines and mixing blocks."""

from typing import Any, Dict, Optional

from hvac_engine.core.connector import OutputConnector
from hvac_engine.core.exceptions import InvalidArgumentError
from hvac_engine.core.stream import HumidAirFlow


class FlowSource:
    """
    Named holder of a humid air flow published on an output connector.

    Used for the pipeline inlet and for recirculation streams of mixing blocks
    that do not come from another block.

    Example:
        >>> exhaust = FlowSource('exhaust', HumidAirFlow.of_values(25.0, 70.0, 1000.0))
        >>> mixer.connect_recirculation(exhaust.output_connector)
    """

    def __init__(self, source_id: str, flow: Optional[HumidAirFlow] = None) -> None:
        if not source_id:
            raise InvalidArgumentError("Source id must be a non-empty string")
        self.source_id = source_id
        self.output_connector: OutputConnector[HumidAirFlow] = OutputConnector(flow)

    @property
    def flow(self) -> Optional[HumidAirFlow]:
        return self.output_connector.get()

    def set_flow(self, flow: HumidAirFlow) -> None:
        self.output_connector.set(flow)

    def get_state(self) -> Dict[str, Any]:
        return {
            'source_id': self.source_id,
            'flow': self.flow.to_dict() if self.flow is not None else None,
        }
