"""Tests for edge cases in the TSPLIB parser."""

import logging
import pytest

from tspkit.exceptions import FormatViolationError, MalformedInputError
from tspkit.formats import DisplayDataType, NodeCoordType, ProblemType


def test_unknown_keyword(parse):
    with pytest.raises(FormatViolationError, match=r"unexpected section 'FOO_SECTION' \(line 3\)"):
        parse("NAME: x", "DIMENSION: 2", "FOO_SECTION", "EOF")


def test_unknown_keyword_value(parse):
    with pytest.raises(FormatViolationError, match="unknown EDGE_WEIGHT_TYPE value 'EUC_4D'"):
        parse("NAME: x", "EDGE_WEIGHT_TYPE: EUC_4D", "EOF")


def test_keyword_values_are_case_sensitive(parse):
    with pytest.raises(FormatViolationError):
        parse("NAME: x", "TYPE: tsp", "EOF")


@pytest.mark.parametrize("section", [
    "NODE_COORD_SECTION", "DEPOT_SECTION", "DEMAND_SECTION", "EDGE_WEIGHT_SECTION",
    "DISPLAY_DATA_SECTION", "FIXED_EDGES_SECTION",
])
def test_section_before_dimension(parse, section):
    with pytest.raises(FormatViolationError, match=f"found '{section}' before 'DIMENSION'"):
        parse("NAME: x", section, "1 0 0", "EOF")


def test_negative_dimension(parse):
    with pytest.raises(FormatViolationError, match="negative DIMENSION"):
        parse("NAME: x", "DIMENSION: -4", "EOF")


def test_dimension_must_be_an_integer(parse):
    with pytest.raises(MalformedInputError, match="'4.5'") as excinfo:
        parse("NAME: x", "DIMENSION: 4.5", "EOF")
    assert excinfo.value.line_number == 2


@pytest.mark.parametrize("value", ["1_0", "\u0661\u0660"])
def test_dimension_rejects_python_only_integer_spellings(parse, value):
    with pytest.raises(MalformedInputError, match="Expected an integer"):
        parse("NAME: x", f"DIMENSION: {value}", "EOF")


def test_autodetect_rejects_underscored_coordinates(parse):
    with pytest.raises(MalformedInputError, match="malformed row"):
        parse("NAME: x", "DIMENSION: 1", "NODE_COORD_SECTION", "1 1_0 2", "EOF")


def test_coordinates_out_of_sequence(parse):
    with pytest.raises(FormatViolationError, match="found node 3 in 'NODE_COORD_SECTION', expected: 2"):
        parse("NAME: x", "DIMENSION: 3", "NODE_COORD_SECTION", "1 0 0", "3 1 1", "2 2 2", "EOF")


def test_autodetect_requires_first_index_one(parse):
    with pytest.raises(FormatViolationError, match=r"has index 2 \(expected: 1\)"):
        parse("NAME: x", "DIMENSION: 2", "NODE_COORD_SECTION", "2 0 0", "1 1 1", "EOF")


def test_autodetect_rejects_unexpected_token_count(parse):
    with pytest.raises(FormatViolationError, match="autodetect it from 5 tokens"):
        parse("NAME: x", "DIMENSION: 2", "NODE_COORD_SECTION", "1 0 0 0 0", "2 1 1 1 1", "EOF")


def test_autodetect_three_dimensional(parse):
    instance = parse("NAME: x", "DIMENSION: 2", "NODE_COORD_SECTION", "1 0 0 0", "2 1 2 3", "EOF")
    assert instance.node_coord_type == NodeCoordType.THREED_COORDS
    assert instance.node_coords.tolist() == [[0.0, 0.0, 0.0], [1.0, 2.0, 3.0]]


def test_coordinates_declared_absent(parse):
    with pytest.raises(FormatViolationError, match="NO_COORDS"):
        parse("NAME: x", "DIMENSION: 1", "NODE_COORD_TYPE: NO_COORDS", "NODE_COORD_SECTION", "1 0 0", "EOF")


def test_truncated_section(parse):
    with pytest.raises(MalformedInputError, match="Unexpected end of input"):
        parse("NAME: x", "DIMENSION: 3", "NODE_COORD_SECTION", "1 0 0", "2 1 1")


def test_display_section_with_coordinate_display(parse):
    with pytest.raises(FormatViolationError, match="COORD_DISPLAY"):
        parse(
            "NAME: x", "DIMENSION: 1", "DISPLAY_DATA_TYPE: COORD_DISPLAY",
            "DISPLAY_DATA_SECTION", "1 0 0", "EOF",
        )


def test_display_section_autodetected(parse):
    instance = parse("NAME: x", "DIMENSION: 2", "DISPLAY_DATA_SECTION", "1 5 5", "2 6 6", "EOF")
    assert instance.display_data_type == DisplayDataType.TWOD_DISPLAY
    assert instance.display_coords.tolist() == [[5.0, 5.0], [6.0, 6.0]]


def test_depot_out_of_range(parse):
    with pytest.raises(FormatViolationError, match=r"node 3 in 'DEPOT_SECTION' is outside \[1, 2\]"):
        parse("NAME: x", "DIMENSION: 2", "DEPOT_SECTION", "3", "-1", "EOF")


def test_several_depots(parse):
    instance = parse("NAME: x", "DIMENSION: 4", "DEPOT_SECTION", "1 2 -1", "EOF")
    assert instance.depots == frozenset({0, 1})


def test_edge_data_without_format(parse):
    with pytest.raises(FormatViolationError, match="'EDGE_DATA_FORMAT' is not declared"):
        parse("NAME: x", "DIMENSION: 2", "EDGE_DATA_SECTION", "1 2", "-1", "EOF")


def test_fixed_edges_alias(parse):
    instance = parse("NAME: x", "TYPE: HCP", "DIMENSION: 3", "FIXED_EDGES", "1 2", "2 3", "-1", "EOF")
    assert instance.fixed_edges == ((0, 1), (1, 2))


def test_sop_leading_dimension_must_match(parse):
    with pytest.raises(FormatViolationError, match="declares 3 nodes, expected 2"):
        parse(
            "NAME: x", "TYPE: SOP", "DIMENSION: 2", "EDGE_WEIGHT_TYPE: EXPLICIT",
            "EDGE_WEIGHT_FORMAT: FULL_MATRIX", "EDGE_WEIGHT_SECTION", "3", "0 1", "-1 0", "EOF",
        )


def test_multiple_tours(parse):
    instance = parse("NAME: x", "TYPE: TOUR", "DIMENSION: 3", "TOUR_SECTION", "1 2 3 -1", "3 2 1 -1", "-1", "EOF")
    assert instance.tours == ((0, 1, 2), (2, 1, 0))


def test_tour_dimension_inferred(parse):
    instance = parse("NAME: rd5.opt.tour", "TYPE: TOUR", "TOUR_SECTION", "5", "3", "1", "4", "2", "-1", "EOF")
    assert instance.dimension == 5
    assert instance.tours == ((4, 2, 0, 3, 1),)


def test_tour_with_wrong_length(parse):
    with pytest.raises(FormatViolationError, match="tour 1 has 2 nodes, expected 3"):
        parse("NAME: x", "TYPE: TOUR", "DIMENSION: 3", "TOUR_SECTION", "1 2 -1", "EOF")


def test_tour_node_out_of_range(parse):
    with pytest.raises(FormatViolationError, match="outside"):
        parse("NAME: x", "TYPE: TOUR", "DIMENSION: 2", "TOUR_SECTION", "1 7 -1", "EOF")


def test_trailing_text_after_tours_is_logged(parse, caplog):
    caplog.set_level(logging.WARNING)
    instance = parse("NAME: x", "TYPE: TOUR", "DIMENSION: 2", "TOUR_SECTION", "1 2 -1", "-1", "Length 42")
    assert instance.tours == ((0, 1),)
    assert any(
        rec[0] == 'tspkit.parsers.tsplib' and
        rec[1] == logging.WARNING and
        'Length 42' in rec[2]
        for rec in caplog.record_tuples
    ), "Expected warning about trailing text"


def test_missing_eof_is_accepted(parse):
    instance = parse("NAME: x", "TYPE: TSP", "DIMENSION: 1", "NODE_COORD_SECTION", "1 0 0")
    assert instance.dimension == 1


def test_anything_after_eof_is_ignored(parse):
    instance = parse("NAME: x", "DIMENSION: 1", "EOF", "not a keyword", "NAME: other")
    assert instance.name == "x"


def test_type_followed_by_author(parse):
    instance = parse("NAME: alb", "TYPE : HCP Arthur Albertson", "DIMENSION: 2", "EOF")
    assert instance.problem_type == ProblemType.HCP


def test_comment_keeps_colons(parse):
    instance = parse("NAME: x", "COMMENT : Drilling problem (Reinelt): 280 holes", "EOF")
    assert instance.comment == "Drilling problem (Reinelt): 280 holes"


def test_name_argument_used_until_name_keyword(parse):
    assert parse("DIMENSION: 1", "EOF", name="fallback").name == "fallback"
    assert parse("NAME: inside", "EOF", name="fallback").name == "inside"
