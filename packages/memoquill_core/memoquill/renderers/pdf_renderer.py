"""

PdfMemoRenderer - renders a ``DocumentPlan`` to PDF with ReportLab platypus.

Page structure:
- footer art drawn at the bottom of every page before the content
- classification line drawn in the footer area of every page
- banner image as the first flowable of the story (first page only)
- header cluster, field blocks, gap, body blocks inside one frame that keeps
  ``footer_reserve`` points free above the footer line

"""

from __future__ import annotations

import io
import logging
from typing import List, Sequence, Tuple

from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.utils import ImageReader
from reportlab.platypus import (
    BaseDocTemplate,
    Flowable,
    Frame,
    Image,
    PageTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
)

from ..engine.assembler.document_assembler import DocumentPlan, FieldBlock
from ..engine.layout_primitives import (
    BlankSpacer,
    Block,
    ListBlock,
    ListItem,
    ParagraphBlock,
    TableBlock,
    TextStyle,
)
from ..engine.script import contains_rtl_script
from ..engine.utils.font_registry import register_default_fonts, resolve_font_name
from ..exceptions import RenderingError
from ..utils.enums import Alignment, Direction
from .render_utils import (
    ALIGNMENTS,
    ensure_page_size,
    label_markup,
    runs_markup,
    to_color,
)

logger = logging.getLogger(__name__)

FOOTER_PADDING_TOP = 2.0
CELL_PADDING = 4.0
GRID_COLOR = "#808080"
HEADER_BACKGROUND = "#F2F2F2"


class PdfMemoRenderer:
    """Render memo plans to PDF bytes."""

    media_type = "application/pdf"
    file_extension = ".pdf"

    def __init__(self, fonts_dir=None, register_fonts: bool = True) -> None:
        if register_fonts:
            register_default_fonts(fonts_dir)

    def render(self, plan: DocumentPlan) -> bytes:
        """
        Render ``plan``.

        Raises:
            RenderingError: If ReportLab rejects the plan (bad image bytes,
                geometry that leaves no room for content, ...)
        """
        try:
            pdf = self._render(plan)
        except RenderingError:
            raise
        except Exception as exc:
            raise RenderingError("Failed to render memo PDF", details=str(exc)) from exc
        logger.debug("Rendered %s: %d bytes", plan.memo_number, len(pdf))
        return pdf

    def _render(self, plan: DocumentPlan) -> bytes:
        buffer = io.BytesIO()
        page_width, page_height = ensure_page_size(plan.page.size)
        margin = plan.page.margin
        content_width = page_width - 2 * margin
        frame_height = 0.0
        if content_width > 0:
            footer = self._footer_paragraph(plan)
            _, footer_height = footer.wrap(content_width, page_height)
            frame_bottom = margin + FOOTER_PADDING_TOP + footer_height + plan.page.footer_reserve
            frame_height = page_height - margin - frame_bottom
        if frame_height <= 0:
            raise RenderingError(
                "Page margins leave no room for content",
                details=f"margin={margin}, footer_reserve={plan.page.footer_reserve}",
            )

        footer_art = self._image_reader(plan.footer_image) if plan.footer_image else None

        def decorate_page(canvas, doc) -> None:
            canvas.saveState()
            if footer_art is not None:
                art_width, art_height = footer_art.getSize()
                height = page_width * art_height / art_width
                canvas.drawImage(footer_art, 0, 0, width=page_width, height=height, mask="auto")
            footer.wrap(content_width, page_height)
            footer.drawOn(canvas, margin, margin)
            canvas.restoreState()

        doc = BaseDocTemplate(
            buffer,
            pagesize=(page_width, page_height),
            leftMargin=margin,
            rightMargin=margin,
            topMargin=margin,
            bottomMargin=margin,
            title=f"Memo {plan.memo_number}",
        )
        frame = Frame(
            margin, frame_bottom, content_width, frame_height,
            id="content", leftPadding=0, rightPadding=0, topPadding=0, bottomPadding=0,
        )
        doc.addPageTemplates([PageTemplate(id="memo", frames=[frame], onPage=decorate_page)])

        story = self._story(plan, content_width, frame_height)
        doc.build(story)
        return buffer.getvalue()

    # ------------------------------------------------------------------
    # Story
    # ------------------------------------------------------------------
    def _story(self, plan: DocumentPlan, content_width: float, frame_height: float) -> List[Flowable]:
        story: List[Flowable] = []

        if plan.banner_image:
            story.append(Spacer(1, plan.page.banner_padding_top))
            story.append(self._banner(plan.banner_image, content_width, frame_height))

        spacing = plan.header.spacing
        for flowable in self._header_cluster(plan, content_width):
            story.append(flowable)
            story.append(Spacer(1, spacing))
        for item in plan.fields:
            story.append(self._field_block(plan, item, content_width))
            story.append(Spacer(1, spacing))

        story.append(Spacer(1, plan.body_gap))

        body_width = min(plan.body_width, content_width)
        for block in plan.body:
            story.extend(self._block(plan, block, content_width, body_width))
        return story

    def _banner(self, data: bytes, content_width: float, frame_height: float) -> Image:
        reader = self._image_reader(data)
        image_width, image_height = reader.getSize()
        width = content_width
        height = width * image_height / image_width
        if height > frame_height / 2:
            height = frame_height / 2
            width = height * image_width / image_height
        return Image(io.BytesIO(data), width=width, height=height)

    def _header_cluster(self, plan: DocumentPlan, content_width: float) -> List[Flowable]:
        header = plan.header
        palette = plan.palette
        base = plan.base_style

        memo_width = min(header.memo_width, content_width)
        memo_label = self._paragraph(
            label_markup(header.memo_label, base.font_family, header.memo_font_size, palette.label_en),
            base, Alignment.LEFT,
        )
        memo_value = self._paragraph(
            self._value_markup(plan, header.memo_number, header.memo_font_size),
            base, Alignment.LEFT,
        )
        memo_table = Table([[memo_label], [memo_value]], colWidths=[memo_width], hAlign="LEFT")
        memo_table.setStyle(TableStyle(self._flush_cells()))

        date_block = self._labelled_value(
            plan,
            header.date_label_en,
            header.date_label_ar,
            header.date_text,
            min(header.date_width, content_width),
            underlined=True,
            line_height=base.line_height,
        )
        return [memo_table, date_block]

    def _field_block(self, plan: DocumentPlan, item: FieldBlock, content_width: float) -> Table:
        return self._labelled_value(
            plan,
            item.label_en,
            item.label_ar,
            item.value,
            min(item.width, content_width),
            underlined=item.underlined,
            line_height=item.line_height,
        )

    def _labelled_value(
        self,
        plan: DocumentPlan,
        label_en: str,
        label_ar: str,
        value: str,
        width: float,
        underlined: bool,
        line_height: float,
    ) -> Table:
        """Bilingual label row (English leading, Arabic right) over a centered value line."""
        palette = plan.palette
        base = plan.base_style
        arabic = plan.arabic_style

        english = self._paragraph(
            label_markup(label_en, base.font_family, base.font_size, palette.label_en),
            base, Alignment.LEFT,
        )
        arabic_label = self._paragraph(
            label_markup(label_ar, arabic.font_family, arabic.font_size, palette.label_ar),
            arabic, Alignment.RIGHT,
        )
        value_style = TextStyle(base.font_family, base.font_size, base.color, line_height)
        value_line = self._paragraph(
            self._value_markup(plan, value, base.font_size), value_style, Alignment.CENTER,
        )

        table = Table(
            [[english, arabic_label], [value_line, ""]],
            colWidths=[width / 2, width / 2],
            hAlign="CENTER",
        )
        commands = self._flush_cells() + [("SPAN", (0, 1), (1, 1))]
        if underlined:
            commands.append(("LINEBELOW", (0, 1), (1, 1), plan.line_thickness, to_color(palette.underline)))
        table.setStyle(TableStyle(commands))
        return table

    # ------------------------------------------------------------------
    # Body blocks
    # ------------------------------------------------------------------
    def _block(self, plan: DocumentPlan, block: Block, content_width: float, body_width: float) -> List[Flowable]:
        if isinstance(block, BlankSpacer):
            return [Spacer(1, block.height)]
        if isinstance(block, ParagraphBlock):
            side = (content_width - body_width) / 2
            style = TextStyle(
                plan.base_style.font_family, plan.base_style.font_size,
                plan.base_style.color, block.line_height,
            )
            return [self._paragraph(runs_markup(block.runs, block.direction), style, block.alignment, indent=side)]
        if isinstance(block, ListBlock):
            return [self._list_row(plan, block, item, body_width) for item in block.items]
        if isinstance(block, TableBlock):
            return [self._table(plan, block, body_width)]
        logger.warning("Skipping unknown block type %s", type(block).__name__)
        return []

    def _list_row(self, plan: DocumentPlan, block: ListBlock, item: ListItem, body_width: float) -> Table:
        base = plan.base_style
        marker = self._paragraph(
            label_markup(item.marker, base.font_family, base.font_size, base.color, bold=False),
            base, item.marker_alignment,
        )
        content = self._paragraph(runs_markup(item.runs, item.direction), base, item.alignment)

        marker_width = min(block.marker_width, body_width)
        content_width = body_width - marker_width
        if item.direction is Direction.RTL:
            row, widths = [content, marker], [content_width, marker_width]
        else:
            row, widths = [marker, content], [marker_width, content_width]

        table = Table([row], colWidths=widths, hAlign="CENTER")
        table.setStyle(TableStyle(self._flush_cells()))
        return table

    def _table(self, plan: DocumentPlan, block: TableBlock, body_width: float) -> Table:
        rows = block.rows
        column_width = body_width / block.columns
        data = []
        for row in rows:
            data.append([
                self._paragraph(runs_markup(cell.runs, cell.direction), plan.base_style, cell.alignment)
                if not cell.is_empty else ""
                for cell in row.cells
            ])

        leading_headers = 0
        for row in rows:
            if not row.is_header:
                break
            leading_headers += 1

        commands = [
            ("GRID", (0, 0), (-1, -1), 0.5, to_color(GRID_COLOR)),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), CELL_PADDING),
            ("RIGHTPADDING", (0, 0), (-1, -1), CELL_PADDING),
            ("TOPPADDING", (0, 0), (-1, -1), CELL_PADDING / 2),
            ("BOTTOMPADDING", (0, 0), (-1, -1), CELL_PADDING / 2),
        ]
        for index, row in enumerate(rows):
            if row.is_header:
                commands.append(("BACKGROUND", (0, index), (-1, index), to_color(HEADER_BACKGROUND)))
        commands.extend(self._span_commands(block, rows))

        table = Table(
            data,
            colWidths=[column_width] * block.columns,
            repeatRows=leading_headers,
            hAlign="CENTER",
        )
        table.setStyle(TableStyle(commands))
        return table

    @staticmethod
    def _span_commands(block: TableBlock, rows: Sequence) -> List[Tuple]:
        """SPAN commands clipped to the grid; overlapping spans are skipped."""
        covered = set()
        commands = []
        last_row = len(rows) - 1
        for row_index, row in enumerate(rows):
            for col_index, cell in enumerate(row.cells):
                if cell.colspan == 1 and cell.rowspan == 1:
                    continue
                end_col = min(col_index + cell.colspan - 1, block.columns - 1)
                end_row = min(row_index + cell.rowspan - 1, last_row)
                region = {
                    (c, r)
                    for c in range(col_index, end_col + 1)
                    for r in range(row_index, end_row + 1)
                }
                if len(region) == 1 or region & covered:
                    continue
                covered |= region
                commands.append(("SPAN", (col_index, row_index), (end_col, end_row)))
        return commands

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _footer_paragraph(self, plan: DocumentPlan) -> Paragraph:
        base = plan.base_style
        footer = plan.footer
        markup = (
            label_markup("(", base.font_family, base.font_size, base.color, bold=False)
            + label_markup(footer.label, base.font_family, base.font_size, plan.palette.label_en)
            + label_markup(": ", base.font_family, base.font_size, base.color, bold=False)
            + self._value_markup(plan, footer.value, base.font_size)
            + label_markup(")", base.font_family, base.font_size, base.color, bold=False)
        )
        return self._paragraph(markup, base, Alignment.CENTER)

    @staticmethod
    def _value_markup(plan: DocumentPlan, value: str, size: float) -> str:
        style = plan.arabic_style if contains_rtl_script(value) else plan.base_style
        return label_markup(value, style.font_family, size, style.color, bold=False)

    @staticmethod
    def _paragraph(markup: str, style: TextStyle, alignment: Alignment, indent: float = 0.0) -> Paragraph:
        paragraph_style = ParagraphStyle(
            name=f"memo-{alignment.value}",
            fontName=resolve_font_name(style.font_family),
            fontSize=style.font_size,
            leading=style.font_size * style.line_height,
            alignment=ALIGNMENTS[alignment],
            textColor=to_color(style.color),
            leftIndent=indent,
            rightIndent=indent,
        )
        return Paragraph(markup, paragraph_style)

    @staticmethod
    def _flush_cells() -> List[Tuple]:
        return [
            ("LEFTPADDING", (0, 0), (-1, -1), 0),
            ("RIGHTPADDING", (0, 0), (-1, -1), 0),
            ("TOPPADDING", (0, 0), (-1, -1), 0),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ]

    @staticmethod
    def _image_reader(data: bytes) -> ImageReader:
        try:
            return ImageReader(io.BytesIO(data))
        except Exception as exc:
            raise RenderingError("Image asset could not be decoded", details=str(exc)) from exc
