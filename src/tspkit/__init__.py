"""
tspkit – TSPLIB instance decoder

Reads the plain-text TSPLIB 95 format used by the TSP, ATSP, HCP, SOP and CVRP benchmark libraries
and exposes:

1. **Parsing** of instance and tour files into an immutable `TsplibInstance` (`tspkit.parsers`).
2. **Edge weights** computed on demand for every declared weight type (`tspkit.weights`).
3. **Archives** of many instances in a directory or zip file (`tspkit.archive`).
4. **Utilities** for compact triangular matrix indexing and logging.

Typical high-level workflow
--------------------------
>>> import tspkit
>>> instance = tspkit.read_instance("berlin52.tsp")
>>> resolver = tspkit.EdgeWeightResolver(instance)
>>> resolver.tour_value(range(instance.dimension))
"""

from .archive import TsplibArchive
from .config import Parameters
from .exceptions import (
    FormatViolationError,
    MalformedInputError,
    TsplibError,
    UnsupportedEdgeWeightTypeError,
)
from .formats import (
    DisplayDataType,
    EdgeDataFormat,
    EdgeWeightFormat,
    EdgeWeightType,
    NodeCoordType,
    ProblemType,
)
from .models import TsplibInstance
from .parsers import TsplibParser, parse_stream, parse_text, read_instance
from .weights import EdgeWeightResolver

__version__ = "0.1.0"

__all__ = [
    "TsplibArchive",
    "Parameters",
    "TsplibError",
    "MalformedInputError",
    "FormatViolationError",
    "UnsupportedEdgeWeightTypeError",
    "ProblemType",
    "EdgeWeightType",
    "EdgeWeightFormat",
    "EdgeDataFormat",
    "NodeCoordType",
    "DisplayDataType",
    "TsplibInstance",
    "TsplibParser",
    "parse_stream",
    "parse_text",
    "read_instance",
    "EdgeWeightResolver",
]
