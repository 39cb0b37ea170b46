"""Keyword values allowed in the specification part of a TSPLIB file.

See the TSPLIB 95 documentation for the meaning of each value.
"""
from enum import Enum
import re

# Tokens are separated by any run of whitespace and/or colons
DELIMITER = re.compile(r"[\s:]+")

EOF = "EOF"


class ProblemType(Enum):
    ATSP = "ATSP"   # Asymmetric travelling salesman problem
    CVRP = "CVRP"   # Capacitated vehicle routing problem
    HCP = "HCP"     # Hamiltonian cycle problem
    SOP = "SOP"     # Sequential ordering problem
    TOUR = "TOUR"   # A collection of tours
    TSP = "TSP"     # Symmetric travelling salesman problem

    @property
    def is_symmetric(self) -> bool:
        return self not in (ProblemType.ATSP, ProblemType.SOP)


class EdgeWeightType(Enum):
    EXPLICIT = "EXPLICIT"
    EUC_2D = "EUC_2D"
    EUC_3D = "EUC_3D"
    MAX_2D = "MAX_2D"
    MAX_3D = "MAX_3D"
    MAN_2D = "MAN_2D"
    MAN_3D = "MAN_3D"
    CEIL_2D = "CEIL_2D"
    GEO = "GEO"
    ATT = "ATT"          # pseudo-Euclidean, att48 and att532
    XRAY1 = "XRAY1"      # crystallography problems, version 1
    XRAY2 = "XRAY2"      # crystallography problems, version 2
    SPECIAL = "SPECIAL"  # function documented elsewhere


class EdgeWeightFormat(Enum):
    FUNCTION = "FUNCTION"
    FULL_MATRIX = "FULL_MATRIX"
    UPPER_ROW = "UPPER_ROW"
    LOWER_ROW = "LOWER_ROW"
    UPPER_DIAG_ROW = "UPPER_DIAG_ROW"
    LOWER_DIAG_ROW = "LOWER_DIAG_ROW"
    UPPER_COL = "UPPER_COL"
    LOWER_COL = "LOWER_COL"
    UPPER_DIAG_COL = "UPPER_DIAG_COL"
    LOWER_DIAG_COL = "LOWER_DIAG_COL"

    @property
    def has_diagonal(self) -> bool:
        return "DIAG" in self.value


class EdgeDataFormat(Enum):
    EDGE_LIST = "EDGE_LIST"
    ADJ_LIST = "ADJ_LIST"


class NodeCoordType(Enum):
    TWOD_COORDS = "TWOD_COORDS"
    THREED_COORDS = "THREED_COORDS"
    NO_COORDS = "NO_COORDS"

    @property
    def n_components(self) -> int:
        return {"TWOD_COORDS": 2, "THREED_COORDS": 3}.get(self.value, 0)


class DisplayDataType(Enum):
    COORD_DISPLAY = "COORD_DISPLAY"
    TWOD_DISPLAY = "TWOD_DISPLAY"
    NO_DISPLAY = "NO_DISPLAY"
