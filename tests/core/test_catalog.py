from __future__ import annotations

import pytest

from horizons_fetcher.core import Body, NumericParseFailure, parse_body, parse_catalog

CATALOG_TEXT = """\
*******************************************************************************
 Multiple major-bodies match string "*"

  ID#      Name                               Designation  IAU/aliases/other
  -------  ---------------------------------- -----------  -------------------
        0  Solar System Barycenter                         SSB
       10  Sun                                             Sol
      399  Earth                                           Geocenter
      699  Saturn
   -78000  Chang'e_5-T1_booster (spacecraft)  WE0913A      2014-065B

   Number of matches =   5. Use ID# to make unique selection.
*******************************************************************************
"""


def test_parse_body_reads_fixed_columns() -> None:
    assert parse_body("        0  Solar System Barycenter                         SSB") == Body(
        id=0, name="Solar System Barycenter"
    )
    assert parse_body("      699  Saturn") == Body(id=699, name="Saturn")
    assert parse_body("  -78000  Chang'e_5-T1_booster (spacecraft)  WE0913A      2014-065B") == Body(
        id=-78000, name="Chang'e_5-T1_booster (spacecraft)"
    )


def test_parse_body_truncates_long_names_to_column() -> None:
    line = "   -12345  " + "X" * 50
    body = parse_body(line)
    assert body.id == -12345
    assert len(body.name) == 33


@pytest.mark.parametrize("line", ["****************", "", "  ID#      Name", "  -------  -----"])
def test_parse_body_rejects_decoration(line: str) -> None:
    with pytest.raises(NumericParseFailure):
        parse_body(line)


def test_parse_catalog_skips_non_data_lines() -> None:
    bodies = list(parse_catalog(CATALOG_TEXT.splitlines()))
    assert [body.id for body in bodies] == [0, 10, 399, 699, -78000]
    assert bodies[2] == Body(id=399, name="Earth")


def test_parse_catalog_is_lazy() -> None:
    consumed = []

    def lines():
        for line in ["junk", "      399  Earth", "      599  Jupiter"]:
            consumed.append(line)
            yield line

    iterator = parse_catalog(lines())
    assert next(iterator) == Body(id=399, name="Earth")
    assert consumed == ["junk", "      399  Earth"]
