"""Decoder for the payload of ``EDGE_WEIGHT_SECTION``.

Every triangular layout is described by the order in which it visits matrix cells. The decoder
walks that order, reads one integer per cell and stores off-diagonal values in the compact strict
upper triangular array (see :mod:`tspkit.utils.indexing`). Diagonal cells, when the layout lists
them, must hold zero and are discarded.
"""
import logging
from typing import Callable, Dict, Iterator, Optional, Tuple

import numpy as np

from tspkit.exceptions import FormatViolationError
from tspkit.formats import EdgeWeightFormat
from tspkit.parsers.tokens import TokenScanner
from tspkit.utils.indexing import compact_length, to_index

logger = logging.getLogger(__name__)

Traversal = Callable[[int], Iterator[Tuple[int, int]]]


def _upper_row(n: int) -> Iterator[Tuple[int, int]]:
    for i in range(n - 1):
        for j in range(i + 1, n):
            yield i, j


def _lower_row(n: int) -> Iterator[Tuple[int, int]]:
    for i in range(1, n):
        for j in range(i):
            yield i, j


def _upper_diag_row(n: int) -> Iterator[Tuple[int, int]]:
    for i in range(n):
        for j in range(i, n):
            yield i, j


def _lower_diag_row(n: int) -> Iterator[Tuple[int, int]]:
    for i in range(n):
        for j in range(i + 1):
            yield i, j


def _upper_col(n: int) -> Iterator[Tuple[int, int]]:
    for j in range(1, n):
        for i in range(j):
            yield i, j


def _lower_col(n: int) -> Iterator[Tuple[int, int]]:
    for j in range(n - 1):
        for i in range(j + 1, n):
            yield i, j


def _upper_diag_col(n: int) -> Iterator[Tuple[int, int]]:
    for j in range(n):
        for i in range(j + 1):
            yield i, j


def _lower_diag_col(n: int) -> Iterator[Tuple[int, int]]:
    for j in range(n):
        for i in range(j, n):
            yield i, j


# Cells (row, col) in the order each layout lists them
LAYOUT_TRAVERSALS: Dict[EdgeWeightFormat, Traversal] = {
    EdgeWeightFormat.UPPER_ROW: _upper_row,
    EdgeWeightFormat.LOWER_ROW: _lower_row,
    EdgeWeightFormat.UPPER_DIAG_ROW: _upper_diag_row,
    EdgeWeightFormat.LOWER_DIAG_ROW: _lower_diag_row,
    EdgeWeightFormat.UPPER_COL: _upper_col,
    EdgeWeightFormat.LOWER_COL: _lower_col,
    EdgeWeightFormat.UPPER_DIAG_COL: _upper_diag_col,
    EdgeWeightFormat.LOWER_DIAG_COL: _lower_diag_col,
}


def read_triangular(
    scanner: TokenScanner, dimension: int, edge_weight_format: EdgeWeightFormat, name: str = None
) -> np.ndarray:
    """Read a triangular layout into the compact strict upper triangular array."""
    traversal = LAYOUT_TRAVERSALS[edge_weight_format]
    weights = np.zeros(compact_length(dimension), dtype=np.int64)

    for i, j in traversal(dimension):
        value = scanner.next_int()
        if i == j:
            if value != 0:
                raise FormatViolationError(
                    f"Instance {name}: diagonal entry ({i}, {j}) of 'EDGE_WEIGHT_SECTION' "
                    f"is {value} (expected: 0)"
                )
        elif i < j:
            weights[to_index(i, j, dimension)] = value
        else:
            weights[to_index(j, i, dimension)] = value

    return weights


def read_full_matrix(scanner: TokenScanner, dimension: int) -> np.ndarray:
    """Read ``dimension**2`` values row by row."""
    matrix = np.empty((dimension, dimension), dtype=np.int64)
    for i in range(dimension):
        for j in range(dimension):
            matrix[i, j] = scanner.next_int()
    return matrix


def compact_symmetric_matrix(matrix: np.ndarray, name: str = None) -> np.ndarray:
    """
    Check that a square matrix is symmetric with a zero diagonal and return its compact form.

    Raises:
        FormatViolationError: at the first offending cell in row-major order.
    """
    violations = matrix != matrix.T
    np.fill_diagonal(violations, np.diag(matrix) != 0)
    offending = np.argwhere(violations)
    if len(offending):
        i, j = (int(x) for x in offending[0])
        if i == j:
            raise FormatViolationError(
                f"Instance {name}: diagonal entry ({i}, {j}) of 'EDGE_WEIGHT_SECTION' "
                f"is {matrix[i, j]} (expected: 0)"
            )
        raise FormatViolationError(
            f"Instance {name}: asymmetric 'FULL_MATRIX', entry ({i}, {j}) is {matrix[i, j]} "
            f"but entry ({j}, {i}) is {matrix[j, i]}"
        )

    return matrix[np.triu_indices(matrix.shape[0], k=1)]


def read_edge_weights(
    scanner: TokenScanner,
    dimension: int,
    edge_weight_format: Optional[EdgeWeightFormat],
    name: str = None,
    symmetric: bool = True,
) -> np.ndarray:
    """
    Decode an ``EDGE_WEIGHT_SECTION`` payload.

    Args:
        scanner: token source positioned right after the section keyword
        dimension: number of nodes
        edge_weight_format: declared ``EDGE_WEIGHT_FORMAT``
        name: instance name, used in error messages
        symmetric: when False a ``FULL_MATRIX`` is returned as is, without symmetry checks

    Returns:
        The compact strict upper triangular array, or the full matrix for asymmetric data.
    """
    if edge_weight_format is None:
        raise FormatViolationError(
            f"Instance {name}: found 'EDGE_WEIGHT_SECTION' but 'EDGE_WEIGHT_FORMAT' is not declared"
        )
    if edge_weight_format == EdgeWeightFormat.FUNCTION:
        raise FormatViolationError(
            f"Instance {name}: found 'EDGE_WEIGHT_SECTION' but EDGE_WEIGHT_FORMAT == FUNCTION"
        )

    logger.debug(f"Reading {edge_weight_format.value} edge weights for {dimension} nodes")

    if edge_weight_format == EdgeWeightFormat.FULL_MATRIX:
        matrix = read_full_matrix(scanner, dimension)
        if not symmetric:
            return matrix
        return compact_symmetric_matrix(matrix, name)

    return read_triangular(scanner, dimension, edge_weight_format, name)
