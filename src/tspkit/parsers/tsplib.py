"""Parser for TSPLIB instance and tour files."""

import gzip
import io
import logging
from pathlib import Path
from typing import IO, Dict, List, Optional, Tuple

import numpy as np

from tspkit.exceptions import FormatViolationError, MalformedInputError
from tspkit.formats import (
    EOF,
    DisplayDataType,
    EdgeDataFormat,
    EdgeWeightFormat,
    EdgeWeightType,
    NodeCoordType,
    ProblemType,
)
from tspkit.models import TsplibInstance
from tspkit.parsers.edge_weights import read_edge_weights
from tspkit.parsers.tokens import TokenScanner, parse_float, parse_int

logger = logging.getLogger(__name__)

# Token count of the first data line -> number of coordinate components
_NODE_COORD_AUTODETECT = {3: NodeCoordType.TWOD_COORDS, 4: NodeCoordType.THREED_COORDS}


class _SectionReader:
    """Parse state of one TSPLIB stream.

    Each keyword maps to a handler that consumes the keyword's whole payload, so the next token
    read by the main loop is always a keyword again.
    """

    def __init__(self, scanner: TokenScanner, name: str = None):
        self.scanner = scanner
        self.done = False

        # Specification part
        self.name = name
        self.problem_type: Optional[ProblemType] = None
        self.comment = ""
        self.dimension = -1
        self.capacity = -1
        self.edge_weight_type: Optional[EdgeWeightType] = None
        self.edge_weight_format: Optional[EdgeWeightFormat] = None
        self.edge_data_format: Optional[EdgeDataFormat] = None
        self.node_coord_type: Optional[NodeCoordType] = None
        self.display_data_type: Optional[DisplayDataType] = None

        # Data part
        self.node_coords: Optional[np.ndarray] = None
        self.display_coords: Optional[np.ndarray] = None
        self.depots: List[int] = []
        self.demands: Dict[int, int] = {}
        self.edges: List[Tuple[int, ...]] = []
        self.fixed_edges: List[Tuple[int, int]] = []
        self.edge_weights: Optional[np.ndarray] = None
        self.tours: List[Tuple[int, ...]] = []

        self.handlers = {
            "NAME": self._read_name,
            "TYPE": self._read_type,
            "COMMENT": self._read_comment,
            "DIMENSION": self._read_dimension,
            "CAPACITY": self._read_capacity,
            "EDGE_WEIGHT_TYPE": lambda: self._read_keyword_value("edge_weight_type", EdgeWeightType),
            "EDGE_WEIGHT_FORMAT": lambda: self._read_keyword_value("edge_weight_format", EdgeWeightFormat),
            "EDGE_DATA_FORMAT": lambda: self._read_keyword_value("edge_data_format", EdgeDataFormat),
            "NODE_COORD_TYPE": lambda: self._read_keyword_value("node_coord_type", NodeCoordType),
            "DISPLAY_DATA_TYPE": lambda: self._read_keyword_value("display_data_type", DisplayDataType),
            "NODE_COORD_SECTION": self._read_node_coords,
            "DEPOT_SECTION": self._read_depots,
            "DEMAND_SECTION": self._read_demands,
            "EDGE_DATA_SECTION": self._read_edge_data,
            # alb4000.hcp spells the section without the suffix
            "FIXED_EDGES_SECTION": self._read_fixed_edges,
            "FIXED_EDGES": self._read_fixed_edges,
            "DISPLAY_DATA_SECTION": self._read_display_data,
            "EDGE_WEIGHT_SECTION": self._read_edge_weights,
            "TOUR_SECTION": self._read_tours,
            EOF: self._stop,
        }

    def run(self) -> TsplibInstance:
        while not self.done and self.scanner.has_next():
            keyword = self.scanner.next()
            handler = self.handlers.get(keyword)
            if handler is None:
                raise FormatViolationError(
                    f"Instance {self.name}: unexpected section {keyword!r} "
                    f"(line {self.scanner.line_number})"
                )
            logger.debug(f"Instance {self.name}: reading {keyword}")
            handler()
        return self._build()

    # ------------------------------------------------------------------
    # Specification part
    # ------------------------------------------------------------------

    def _read_name(self):
        self.name = self.scanner.rest_of_line()

    def _read_comment(self):
        self.comment = self.scanner.rest_of_line()

    def _read_type(self):
        self._read_keyword_value("problem_type", ProblemType)
        # Some instances report the author's name after the type
        trailing = self.scanner.rest_of_line()
        if trailing:
            logger.debug(f"Instance {self.name}: ignoring text after TYPE: {trailing!r}")

    def _read_dimension(self):
        dimension = self.scanner.next_int()
        if dimension < 0:
            raise FormatViolationError(f"Instance {self.name}: negative DIMENSION {dimension}")
        self.dimension = dimension

    def _read_capacity(self):
        self.capacity = self.scanner.next_int()

    def _read_keyword_value(self, attribute: str, enum_cls):
        token = self.scanner.next()
        try:
            value = enum_cls(token)
        except ValueError:
            allowed = ", ".join(member.value for member in enum_cls)
            raise FormatViolationError(
                f"Instance {self.name}: unknown {attribute.upper()} value {token!r} "
                f"(allowed: {allowed})"
            ) from None
        setattr(self, attribute, value)

    def _stop(self):
        self.done = True

    # ------------------------------------------------------------------
    # Data part
    # ------------------------------------------------------------------

    def _require_dimension(self, section: str):
        if self.dimension < 0:
            raise FormatViolationError(
                f"Instance {self.name}: found '{section}' before 'DIMENSION'"
            )

    def _node(self, index: int, section: str) -> int:
        """Validate a 1-based node index read from the file and return it 0-based."""
        if index < 1 or index > self.dimension:
            raise FormatViolationError(
                f"Instance {self.name}: node {index} in '{section}' is outside [1, {self.dimension}]"
            )
        return index - 1

    def _sniff_first_row(self, section: str, allowed: Dict[int, object]):
        """Autodetect the coordinate type from the token count of the first data line."""
        tokens = self.scanner.next_line_tokens()
        detected = allowed.get(len(tokens))
        if detected is None:
            raise FormatViolationError(
                f"Instance {self.name}: found '{section}' with no declared coordinate type "
                f"and failed to autodetect it from {len(tokens)} tokens"
            )
        try:
            index = parse_int(tokens[0])
            values = [parse_float(t) for t in tokens[1:]]
        except ValueError:
            raise MalformedInputError(
                f"Instance {self.name}: malformed row {' '.join(tokens)!r} in '{section}'",
                self.scanner.line_number,
            ) from None
        if index != 1:
            raise FormatViolationError(
                f"Instance {self.name}: first node in '{section}' has index {index} (expected: 1)"
            )
        return detected, values

    def _read_coordinate_rows(self, section: str, n_components: int, first_row=None) -> np.ndarray:
        coords = np.empty((self.dimension, n_components), dtype=float)
        start = 0
        if first_row is not None:
            coords[0] = first_row
            start = 1

        for i in range(start, self.dimension):
            index = self.scanner.next_int()
            if index != i + 1:
                raise FormatViolationError(
                    f"Instance {self.name}: found node {index} in '{section}', expected: {i + 1}"
                )
            for c in range(n_components):
                coords[i, c] = self.scanner.next_float()
        return coords

    def _read_node_coords(self):
        section = "NODE_COORD_SECTION"
        self._require_dimension(section)

        first_row = None
        if self.node_coord_type is None and self.dimension > 0:
            self.node_coord_type, first_row = self._sniff_first_row(section, _NODE_COORD_AUTODETECT)
            logger.debug(f"Instance {self.name}: detected {self.node_coord_type.value}")
        elif self.node_coord_type == NodeCoordType.NO_COORDS:
            raise FormatViolationError(
                f"Instance {self.name}: found '{section}' but NODE_COORD_TYPE == NO_COORDS"
            )

        n_components = self.node_coord_type.n_components if self.node_coord_type else 2
        self.node_coords = self._read_coordinate_rows(section, n_components, first_row)

    def _read_display_data(self):
        section = "DISPLAY_DATA_SECTION"
        self._require_dimension(section)

        first_row = None
        if self.display_data_type is None and self.dimension > 0:
            self.display_data_type, first_row = self._sniff_first_row(
                section, {3: DisplayDataType.TWOD_DISPLAY}
            )
        elif self.display_data_type in (DisplayDataType.COORD_DISPLAY, DisplayDataType.NO_DISPLAY):
            raise FormatViolationError(
                f"Instance {self.name}: found '{section}' but "
                f"DISPLAY_DATA_TYPE == {self.display_data_type.value}"
            )

        self.display_coords = self._read_coordinate_rows(section, 2, first_row)

    def _read_depots(self):
        section = "DEPOT_SECTION"
        self._require_dimension(section)
        while True:
            node = self.scanner.next_int()
            if node == -1:
                break
            self.depots.append(self._node(node, section))

    def _read_demands(self):
        section = "DEMAND_SECTION"
        self._require_dimension(section)
        for _ in range(self.dimension):
            node = self._node(self.scanner.next_int(), section)
            self.demands[node] = self.scanner.next_int()

    def _read_edge_data(self):
        section = "EDGE_DATA_SECTION"
        self._require_dimension(section)
        if self.edge_data_format is None:
            raise FormatViolationError(
                f"Instance {self.name}: found '{section}' but 'EDGE_DATA_FORMAT' is not declared"
            )

        if self.edge_data_format == EdgeDataFormat.EDGE_LIST:
            self.edges.extend(self._read_node_pairs(section))
            return

        # ADJ_LIST: each line is a node followed by its neighbours and -1, then a final -1
        while True:
            first = self.scanner.next_int()
            if first == -1:
                break
            adjacency = [self._node(first, section)]
            while True:
                node = self.scanner.next_int()
                if node == -1:
                    break
                adjacency.append(self._node(node, section))
            self.edges.append(tuple(adjacency))

    def _read_fixed_edges(self):
        section = "FIXED_EDGES_SECTION"
        self._require_dimension(section)
        self.fixed_edges.extend(self._read_node_pairs(section))

    def _read_node_pairs(self, section: str) -> List[Tuple[int, int]]:
        pairs = []
        while True:
            first = self.scanner.next_int()
            if first == -1:
                break
            u = self._node(first, section)
            v = self._node(self.scanner.next_int(), section)
            pairs.append((u, v))
        return pairs

    def _read_edge_weights(self):
        section = "EDGE_WEIGHT_SECTION"
        self._require_dimension(section)
        symmetric = self.problem_type is None or self.problem_type.is_symmetric

        if self.problem_type == ProblemType.SOP and self.edge_weight_format == EdgeWeightFormat.FULL_MATRIX:
            # SOP files repeat the dimension before the matrix
            declared = self.scanner.next_int()
            if declared != self.dimension:
                raise FormatViolationError(
                    f"Instance {self.name}: '{section}' declares {declared} nodes, "
                    f"expected {self.dimension}"
                )

        self.edge_weights = read_edge_weights(
            self.scanner, self.dimension, self.edge_weight_format, self.name, symmetric=symmetric
        )

    def _read_tour_nodes(self) -> List[int]:
        """Read node indices up to -1, a non-numeric token or the end of the stream."""
        nodes = []
        while self.scanner.has_next_int():
            node = self.scanner.next_int()
            if node == -1:
                break
            nodes.append(node)
        return nodes

    def _add_tour(self, nodes: List[int]):
        ordinal = len(self.tours) + 1
        if len(nodes) != self.dimension:
            raise FormatViolationError(
                f"Instance {self.name}: tour {ordinal} has {len(nodes)} nodes, "
                f"expected {self.dimension}"
            )
        self.tours.append(tuple(self._node(node, f"TOUR_SECTION (tour {ordinal})") for node in nodes))

    def _read_tours(self):
        if self.dimension < 0:
            # e.g. rd100.opt.tour does not declare its dimension
            first = self._read_tour_nodes()
            self.dimension = len(first)
            logger.debug(f"Instance {self.name}: dimension inferred from first tour: {self.dimension}")
            self._add_tour(first)

        while self.scanner.has_next_int():
            node = self.scanner.next_int()
            if node == -1:
                break
            self._add_tour([node] + self._read_tour_nodes())

        if self.scanner.has_next() and self.scanner.peek() not in self.handlers:
            trailing = self.scanner.rest_of_line()
            logger.warning(
                f"Instance {self.name}: ignoring trailing text after 'TOUR_SECTION': {trailing!r}"
            )
            self.done = True

    # ------------------------------------------------------------------

    def _build(self) -> TsplibInstance:
        display_data_type = self.display_data_type
        if display_data_type is None:
            display_data_type = (
                DisplayDataType.COORD_DISPLAY if self.node_coords is not None
                else DisplayDataType.NO_DISPLAY
            )

        return TsplibInstance(
            name=self.name if self.name is not None else "",
            problem_type=self.problem_type,
            comment=self.comment,
            dimension=self.dimension,
            capacity=self.capacity,
            edge_weight_type=self.edge_weight_type,
            edge_weight_format=self.edge_weight_format,
            edge_data_format=self.edge_data_format,
            node_coord_type=self.node_coord_type,
            display_data_type=display_data_type,
            node_coords=self.node_coords,
            display_coords=self.display_coords,
            depots=frozenset(self.depots),
            demands=self.demands,
            edges=tuple(self.edges),
            fixed_edges=tuple(self.fixed_edges),
            edge_weights=self.edge_weights,
            tours=tuple(self.tours),
        )


def parse_stream(stream: IO, name: str = None, encoding: str = "utf-8") -> TsplibInstance:
    """
    Parse a text or binary stream in TSPLIB format.

    The caller hands the stream over: it is closed before this function returns or raises.

    Args:
        stream: source in TSPLIB format
        name: instance name used until a NAME keyword is read
        encoding: text encoding applied to binary streams

    Returns:
        The decoded instance.
    """
    with stream:
        text = stream if isinstance(stream, io.TextIOBase) else io.TextIOWrapper(stream, encoding=encoding)
        instance = _SectionReader(TokenScanner(text), name=name).run()

    logger.info(
        f"Parsed TSPLIB instance {instance.name}: {instance.dimension} nodes, "
        f"type={instance.problem_type.value if instance.problem_type else 'n/a'}"
    )
    return instance


def parse_text(text: str, name: str = None) -> TsplibInstance:
    """Parse TSPLIB content held in a string."""
    return parse_stream(io.StringIO(text), name=name)


def instance_stem(path: Path | str) -> str:
    """File name without directories, a trailing ``.gz`` and the format suffix."""
    filename = Path(path).name
    if filename.endswith(".gz"):
        filename = filename[:-3]
    return Path(filename).stem


class TsplibParser:
    """Parser for TSPLIB files on disk, optionally gzip-compressed."""

    def __init__(self, file_path: Path | str, encoding: str = "utf-8"):
        """Initialize parser with instance file path."""
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"TSPLIB file not found: {file_path}")

        self.encoding = encoding
        self.instance_name = instance_stem(self.file_path)

    def parse(self) -> TsplibInstance:
        """Parse the file; the file handle is released on every exit path."""
        if self.file_path.suffix == ".gz":
            stream = gzip.open(self.file_path, "rb")
        else:
            stream = open(self.file_path, "rb")
        return parse_stream(stream, name=self.instance_name, encoding=self.encoding)


def read_instance(path: Path | str, encoding: str = "utf-8") -> TsplibInstance:
    """Read a TSPLIB file from disk."""
    return TsplibParser(path, encoding=encoding).parse()
