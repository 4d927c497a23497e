"""
Report Export Service
=====================
Renders a selection of reports into a one-table PDF with ReportLab.

Layout: green title "Garden Monitor Report", a "Generated: ..." line, then a
grid with columns No / Plant (ID) / Description and a green header row.
"""

from __future__ import annotations

import logging
from datetime import datetime
from io import BytesIO
from typing import Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.domain.exceptions import ServiceError, ValidationError
from app.domain.report import Report
from app.utils.time import epoch_millis

logger = logging.getLogger(__name__)

REPORT_TITLE = "Garden Monitor Report"
BRAND_GREEN = colors.Color(46 / 255, 125 / 255, 50 / 255)
MUTED_GREY = colors.Color(100 / 255, 100 / 255, 100 / 255)
TABLE_COLUMNS = ("No", "Plant (ID)", "Description")


class ReportExportService:
    """Builds PDF exports of selected reports."""

    def __init__(self, pagesize: tuple[float, float] = A4):
        self.pagesize = pagesize
        styles = getSampleStyleSheet()
        self._title_style = ParagraphStyle(
            "ReportTitle", parent=styles["Title"], fontSize=22, leading=26, textColor=BRAND_GREEN, alignment=0
        )
        self._meta_style = ParagraphStyle("ReportMeta", parent=styles["Normal"], fontSize=11, textColor=MUTED_GREY)
        self._cell_style = ParagraphStyle("ReportCell", parent=styles["Normal"], fontSize=11, leading=14)

    @staticmethod
    def filename() -> str:
        return f"garden_report_{epoch_millis()}.pdf"

    def table_rows(self, reports: Sequence[Report]) -> list[list[str]]:
        """Plain-text rows: running number, "<plant> (<garden>)", description."""
        return [
            [str(index), f"{r.plant_identifier} ({r.garden_name})", r.description]
            for index, r in enumerate(reports, start=1)
        ]

    def render_pdf(self, reports: Sequence[Report], generated_at: datetime | None = None) -> bytes:
        """
        Render *reports* in the given order.

        Raises:
            ValidationError: Empty selection
            ServiceError: ReportLab failed to build the document
        """
        if not reports:
            raise ValidationError("Please select at least one plant.")

        stamp = (generated_at or datetime.now()).strftime("%m/%d/%Y, %I:%M:%S %p")
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=self.pagesize,
            leftMargin=14 * mm,
            rightMargin=14 * mm,
            topMargin=12 * mm,
            bottomMargin=12 * mm,
            title=REPORT_TITLE,
        )

        header = [Paragraph(f"<b>{name}</b>", self._header_style()) for name in TABLE_COLUMNS]
        body = [[Paragraph(escape(cell), self._cell_style) for cell in row] for row in self.table_rows(reports)]
        width = doc.width
        table = Table([header, *body], colWidths=[width * 0.08, width * 0.32, width * 0.60], repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), BRAND_GREEN),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                    ("LEFTPADDING", (0, 0), (-1, -1), 4),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )

        story = [
            Paragraph(REPORT_TITLE, self._title_style),
            Paragraph(escape(f"Generated: {stamp}"), self._meta_style),
            Spacer(1, 6 * mm),
            table,
        ]
        try:
            doc.build(story)
        except Exception as e:
            logger.error(f"Failed to render PDF for {len(reports)} reports: {e}")
            raise ServiceError("An error occurred while generating PDF.") from e

        logger.info("Rendered PDF export with %d reports", len(reports))
        return buffer.getvalue()

    def _header_style(self) -> ParagraphStyle:
        return ParagraphStyle("ReportHeader", parent=self._cell_style, textColor=colors.white)
