"""Edge weight lookup on top of a parsed instance."""
import logging
from typing import Callable, FrozenSet, Optional, Sequence, Tuple

import numpy as np

from tspkit.distances import REQUIRED_COMPONENTS, point_distance
from tspkit.exceptions import FormatViolationError, UnsupportedEdgeWeightTypeError
from tspkit.formats import EdgeDataFormat, EdgeWeightType, ProblemType
from tspkit.models import TsplibInstance
from tspkit.utils.indexing import to_index

logger = logging.getLogger(__name__)

SpecialFunction = Callable[[Sequence[float], Sequence[float]], int]


def edge_set(instance: TsplibInstance) -> FrozenSet[Tuple[int, int]]:
    """Both orientations of every edge listed in ``EDGE_DATA_SECTION``."""
    pairs = set()
    if instance.edge_data_format == EdgeDataFormat.ADJ_LIST:
        for adjacency in instance.edges:
            head = adjacency[0]
            for node in adjacency[1:]:
                pairs.add((head, node))
                pairs.add((node, head))
    else:
        for u, v in instance.edges:
            pairs.add((u, v))
            pairs.add((v, u))
    return frozenset(pairs)


class EdgeWeightResolver:
    """
    Computes the weight of any edge of an instance.

    The weight source is chosen once, at construction, from the instance's edge weight type:
    explicit weights are looked up, coordinate based types call the matching function of
    :mod:`tspkit.distances`, ``SPECIAL`` calls the function supplied by the caller.
    """

    def __init__(self, instance: TsplibInstance, special_function: Optional[SpecialFunction] = None):
        self.instance = instance
        self.dimension = instance.dimension
        self._edges: Optional[FrozenSet[Tuple[int, int]]] = None

        weight_type = instance.edge_weight_type
        if weight_type == EdgeWeightType.SPECIAL:
            if special_function is None:
                raise UnsupportedEdgeWeightTypeError(
                    f"Instance {instance.name} declares 'SPECIAL' edge weights "
                    f"but no weight function was provided"
                )
        elif special_function is not None:
            raise ValueError(
                f"A custom weight function is only accepted for 'SPECIAL' instances, "
                f"instance {instance.name} declares {weight_type.value if weight_type else 'none'}"
            )

        self._weight = self._select_weight_source(special_function)

    def _select_weight_source(self, special_function) -> Callable[[int, int], int]:
        instance = self.instance
        weight_type = instance.edge_weight_type

        if instance.problem_type == ProblemType.HCP or (weight_type is None and instance.edges):
            self._edges = edge_set(instance)
            return lambda i, j: 1 if (i, j) in self._edges else 0

        if weight_type is None:
            raise UnsupportedEdgeWeightTypeError(
                f"Instance {instance.name} declares no EDGE_WEIGHT_TYPE"
            )

        if weight_type == EdgeWeightType.EXPLICIT:
            weights = instance.edge_weights
            if weights is None:
                raise FormatViolationError(
                    f"Instance {instance.name} declares EXPLICIT weights but has no 'EDGE_WEIGHT_SECTION'"
                )
            if weights.ndim == 2:
                return lambda i, j: int(weights[i, j])
            n = self.dimension
            return lambda i, j: (
                0 if i == j else int(weights[to_index(i, j, n) if i < j else to_index(j, i, n)])
            )

        if weight_type == EdgeWeightType.SPECIAL:
            points = [tuple(row) for row in self._require_coords().tolist()]
            return lambda i, j: int(special_function(points[i], points[j]))

        distance = point_distance(weight_type)
        coords = self._require_coords()
        points = [tuple(row) for row in coords.tolist()]
        needed = REQUIRED_COMPONENTS[weight_type]
        if coords.shape[1] < needed:
            raise FormatViolationError(
                f"Instance {instance.name}: {weight_type.value} needs {needed} coordinates per node, "
                f"found {coords.shape[1]}"
            )
        return lambda i, j: distance(points[i], points[j])

    def _require_coords(self) -> np.ndarray:
        coords = self.instance.node_coords
        if coords is None:
            raise FormatViolationError(
                f"Instance {self.instance.name}: {self.instance.edge_weight_type.value} weights "
                f"need a 'NODE_COORD_SECTION'"
            )
        return coords

    def get_edge_weight(self, i: int, j: int) -> int:
        """Weight of the edge from node ``i`` to node ``j`` (0-based)."""
        return self._weight(i, j)

    def has_edge(self, i: int, j: int) -> bool:
        """True when an edge joins ``i`` and ``j``; graphs are complete unless edges are listed."""
        if self._edges is not None:
            return (i, j) in self._edges
        return 0 <= i < self.dimension and 0 <= j < self.dimension and i != j

    def tour_value(self, tour: Sequence[int]) -> int:
        """
        Total weight of a closed tour.

        Args:
            tour: 0-based nodes without repeating the first one at the end,
                e.g. ``[2, 3, 5]`` is 2 -> 3 -> 5 -> 2.
        """
        n = len(tour)
        if n < 2:
            return 0
        value = self._weight(tour[-1], tour[0])
        for a, b in zip(tour, tour[1:]):
            value += self._weight(a, b)
        return value

    def materialize_matrix(self) -> np.ndarray:
        """
        Fresh ``(dimension, dimension)`` matrix of all edge weights.

        Entry ``[i, j]`` equals ``get_edge_weight(i, j)``, diagonal included: GEO gives 1 there.
        """
        n = self.dimension
        weights = self.instance.edge_weights
        if self.instance.edge_weight_type == EdgeWeightType.EXPLICIT and weights is not None:
            if weights.ndim == 2:
                return weights.copy()
            matrix = np.zeros((n, n), dtype=np.int64)
            matrix[np.triu_indices(n, k=1)] = weights
            return matrix + matrix.T

        logger.debug(f"Materializing {n}x{n} weight matrix for {self.instance.name}")
        matrix = np.zeros((n, n), dtype=np.int64)
        for i in range(n):
            for j in range(n):
                matrix[i, j] = self._weight(i, j)
        return matrix
