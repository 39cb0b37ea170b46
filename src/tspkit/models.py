from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

import numpy as np

from tspkit.formats import (
    DisplayDataType,
    EdgeDataFormat,
    EdgeWeightFormat,
    EdgeWeightType,
    NodeCoordType,
    ProblemType,
)


@dataclass(frozen=True, eq=False)
class TsplibInstance:
    """
    Container for the content of a TSPLIB file.

    Node indices are 0-based everywhere. Arrays are flagged read-only so an instance can be shared
    between threads without copying.

    ``edge_weights`` holds either the compact strict upper triangle (1-D, symmetric problems) or
    the full ``(dimension, dimension)`` matrix (ATSP and SOP).
    """
    # Specification part
    name: str
    problem_type: Optional[ProblemType] = None
    comment: str = ""
    dimension: int = -1
    capacity: int = -1
    edge_weight_type: Optional[EdgeWeightType] = None
    edge_weight_format: Optional[EdgeWeightFormat] = None
    edge_data_format: Optional[EdgeDataFormat] = None
    node_coord_type: Optional[NodeCoordType] = None
    display_data_type: Optional[DisplayDataType] = None

    # Data part
    node_coords: Optional[np.ndarray] = None
    display_coords: Optional[np.ndarray] = None
    depots: FrozenSet[int] = frozenset()
    demands: Mapping[int, int] = field(default_factory=dict)
    edges: Tuple[Tuple[int, ...], ...] = ()
    fixed_edges: Tuple[Tuple[int, int], ...] = ()
    edge_weights: Optional[np.ndarray] = None
    tours: Tuple[Tuple[int, ...], ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'demands', MappingProxyType(dict(self.demands)))
        for name in ('node_coords', 'display_coords', 'edge_weights'):
            array = getattr(self, name)
            if array is not None:
                array.setflags(write=False)

    @property
    def is_symmetric(self) -> bool:
        """False only for problem types whose weights depend on the direction of travel."""
        return self.problem_type is None or self.problem_type.is_symmetric

    @property
    def has_node_coords(self) -> bool:
        return self.node_coords is not None

    @property
    def has_full_matrix(self) -> bool:
        return self.edge_weights is not None and self.edge_weights.ndim == 2
