"""
Tests for the table planner.
"""

import pytest

from memoquill.engine.table_planner import collect_rows, plan_table
from memoquill.parser.sanitizer import sanitize
from memoquill.utils.enums import Alignment, Direction


def table_element(markup):
    return sanitize(markup).element_children()[0]


def cell_texts(row):
    return ["".join(run.text for run in cell.runs) for cell in row.cells]


class TestPlanTable:
    """Test cases for plan_table."""

    def test_header_row_and_padded_body_row(self, base_style, arabic_style):
        """<th> row becomes the header; the short body row is padded."""
        table = plan_table(
            table_element("<table><tr><th>A</th><th>B</th></tr><tr><td>1</td></tr></table>"),
            base_style,
            arabic_style,
        )

        assert table.columns == 2
        assert len(table.header_rows) == 1
        assert len(table.body_rows) == 1
        assert cell_texts(table.header_rows[0]) == ["A", "B"]
        body = table.body_rows[0]
        assert len(body.cells) == 2
        assert cell_texts(body) == ["1", ""]
        assert body.cells[1].is_empty

    @pytest.mark.parametrize("markup", [
        "<table><tr><td>a</td></tr><tr><td>b</td><td>c</td><td>d</td></tr><tr></tr></table>",
        "<table><thead><tr><th>h</th></tr></thead><tbody><tr><td>1</td><td>2</td></tr></tbody></table>",
        "<table><tr><td>x</td><td>y</td></tr><tbody><tr><td>z</td></tr></tbody></table>",
    ])
    def test_every_row_is_rectangular(self, base_style, arabic_style, markup):
        """All rows hold exactly ``columns`` cells after padding."""
        table = plan_table(table_element(markup), base_style, arabic_style)

        assert all(len(row.cells) == table.columns for row in table.rows)

    def test_header_cells_are_bold(self, base_style, arabic_style):
        """Header rows render with bold emphasis, body rows without."""
        table = plan_table(
            table_element("<table><tr><th>H</th></tr><tr><td>B</td></tr></table>"),
            base_style,
            arabic_style,
        )

        assert table.header_rows[0].cells[0].runs[0].bold
        assert not table.body_rows[0].cells[0].runs[0].bold

    def test_thead_rows_are_headers(self, base_style, arabic_style):
        """Rows inside <thead> are headers even with <td> cells."""
        table = plan_table(
            table_element("<table><thead><tr><td>H</td></tr></thead><tbody><tr><td>B</td></tr></tbody></table>"),
            base_style,
            arabic_style,
        )

        assert cell_texts(table.header_rows[0]) == ["H"]
        assert cell_texts(table.body_rows[0]) == ["B"]

    def test_padding_cells_follow_row_kind(self, base_style, arabic_style):
        """Padding cells of a header row are header cells."""
        table = plan_table(
            table_element("<table><tr><th>A</th></tr><tr><td>1</td><td>2</td></tr></table>"),
            base_style,
            arabic_style,
        )

        assert table.header_rows[0].cells[1].is_header
        assert table.header_rows[0].cells[1].is_empty

    def test_rows_keep_document_order(self, base_style, arabic_style):
        """rows interleaves header and body rows as written."""
        table = plan_table(
            table_element(
                "<table><tr><td>1</td></tr><tr><th>H</th></tr><tr><td>2</td></tr></table>"
            ),
            base_style,
            arabic_style,
        )

        assert [cell_texts(row)[0] for row in table.rows] == ["1", "H", "2"]
        assert [row.is_header for row in table.rows] == [False, True, False]

    @pytest.mark.parametrize("markup", [
        "<table></table>",
        "<table><tr></tr><tr></tr></table>",
        "<table><tbody></tbody></table>",
    ])
    def test_degenerate_tables(self, base_style, arabic_style, markup):
        """Tables without rows or cells plan to nothing."""
        assert plan_table(table_element(markup), base_style, arabic_style) is None

    def test_cell_direction_and_alignment(self, base_style, arabic_style):
        """Each cell resolves its own direction and alignment."""
        table = plan_table(
            table_element(
                '<table><tr><td>مرحبا</td><td>Hello</td><td style="text-align: center">x</td></tr></table>'
            ),
            base_style,
            arabic_style,
        )

        arabic, latin, centered = table.body_rows[0].cells
        assert (arabic.direction, arabic.alignment) == (Direction.RTL, Alignment.RIGHT)
        assert (latin.direction, latin.alignment) == (Direction.LTR, Alignment.LEFT)
        assert centered.alignment is Alignment.CENTER

    def test_spans_are_carried(self, base_style, arabic_style):
        """Sanitized colspan/rowspan values reach the planned cell."""
        table = plan_table(
            table_element('<table><tr><td colspan="2" rowspan="3">a</td><td colspan="0">b</td></tr></table>'),
            base_style,
            arabic_style,
        )

        first, second = table.body_rows[0].cells
        assert (first.colspan, first.rowspan) == (2, 3)
        assert (second.colspan, second.rowspan) == (1, 1)

    def test_cell_runs_compose_inline_markup(self, base_style, arabic_style):
        """Cells carry their own inline runs."""
        table = plan_table(
            table_element("<table><tr><td>a <i>b</i><br>c</td></tr></table>"),
            base_style,
            arabic_style,
        )

        runs = table.body_rows[0].cells[0].runs
        assert runs[1].italic
        assert len(runs) == 4

    def test_to_dict(self, base_style, arabic_style):
        """to_dict describes the grid."""
        table = plan_table(
            table_element('<table><tr><th>A</th></tr><tr><td colspan="2">1</td></tr></table>'),
            base_style,
            arabic_style,
        )

        data = table.to_dict()
        assert data["type"] == "table"
        assert data["columns"] == 1
        assert data["body_rows"][0]["cells"][0]["colspan"] == 2


class TestCollectRows:
    """Test cases for collect_rows."""

    def test_collects_bare_and_grouped_rows(self):
        """Rows come from thead, tbody and the table itself, in order."""
        table = table_element(
            "<table><thead><tr><th>h</th></tr></thead><tr><td>a</td></tr><tbody><tr><td>b</td></tr></tbody></table>"
        )

        rows = collect_rows(table)

        assert [(row.text_content(), in_head) for row, in_head in rows] == [
            ("h", True), ("a", False), ("b", False),
        ]

    def test_nested_rows_are_not_collected(self):
        """Rows of a table nested in a cell belong to that table."""
        table = table_element("<table><tr><td><table><tr><td>x</td></tr></table></td></tr></table>")

        assert len(collect_rows(table)) == 1
