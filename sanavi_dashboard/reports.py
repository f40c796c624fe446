"""
reports.py: Monthly PDF reports (cash movements and inventory movements).

Both reports share one template: dark header band with the brand name and
logo on every page, title / issue date / month block, a movements table that
repeats its header across pages, a totals row and a signature block.
"""

import base64
import binascii
from datetime import datetime
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from sanavi_dashboard import config
from sanavi_dashboard.aggregator import month_label
from sanavi_dashboard.logging_utils import get_logger
from sanavi_dashboard.models import KIND_LABELS, MOVEMENT_LABELS, REASON_LABELS

log = get_logger(__name__)

PRIME = colors.HexColor("#CEFD7B")
DARK = colors.HexColor("#09090B")
ROW_ALT = colors.HexColor("#F5F5F5")

HEADER_HEIGHT = 40 * mm
LOGO_WIDTH = 25 * mm
MARGIN = 14 * mm


def _logo_reader(branding):
    """ImageReader for the stored logo, or None when there is none / it is unreadable."""
    if branding is None or not branding.has_logo:
        return None
    if any(d is None or d <= 0 for d in branding.logo_dimensions):
        log.warning("Skipping logo with invalid dimensions %s", branding.logo_dimensions)
        return None
    payload = branding.logo_image.split(",", 1)[-1]
    try:
        reader = ImageReader(BytesIO(base64.b64decode(payload)))
        reader.getSize()
        return reader
    except (binascii.Error, OSError, ValueError) as e:
        log.warning("Skipping unreadable logo in report: %s", e)
        return None


class ReportBuilder:
    """Render one monthly report to PDF bytes."""

    def __init__(self, branding=None, brand_name=None, signatory=None, signatory_title=None):
        self.branding = branding
        self.brand_name = brand_name or config.BRAND_NAME
        self.signatory = signatory or config.SIGNATORY
        self.signatory_title = signatory_title or config.SIGNATORY_TITLE
        self.styles = getSampleStyleSheet()
        self.custom_styles = self._create_custom_styles()
        self._logo = _logo_reader(branding)

    def _create_custom_styles(self):
        return {
            "Title": ParagraphStyle("ReportTitle", parent=self.styles["Heading1"],
                                    fontName="Helvetica-Bold", fontSize=18, textColor=DARK,
                                    spaceAfter=4),
            "Meta": ParagraphStyle("ReportMeta", parent=self.styles["Normal"],
                                   fontSize=10, textColor=DARK),
            "Month": ParagraphStyle("ReportMonth", parent=self.styles["Normal"],
                                    fontName="Helvetica-Bold", fontSize=12, textColor=DARK,
                                    spaceBefore=4),
            "Cell": ParagraphStyle("ReportCell", parent=self.styles["Normal"], fontSize=9,
                                   leading=11),
            "Signature": ParagraphStyle("ReportSignature", parent=self.styles["Normal"],
                                        fontSize=10, textColor=DARK, leading=14),
        }

    # ── Page decoration ──────────────────────────────────────────────────

    def _draw_header(self, canvas, doc):
        width, height = doc.pagesize
        canvas.saveState()
        canvas.setFillColor(DARK)
        canvas.rect(0, height - HEADER_HEIGHT, width, HEADER_HEIGHT, stroke=0, fill=1)

        if self._logo is not None:
            w, h = self.branding.logo_dimensions
            logo_h = LOGO_WIDTH * h / w
            canvas.drawImage(self._logo, MARGIN, height - 8 * mm - logo_h,
                             width=LOGO_WIDTH, height=logo_h, mask="auto")

        canvas.setFillColor(colors.white)
        canvas.setFont("Helvetica-Bold", 22)
        canvas.drawString(50 * mm, height - 22 * mm, self.brand_name)

        canvas.setFillColor(colors.grey)
        canvas.setFont("Helvetica", 8)
        canvas.drawRightString(width - MARGIN, 10 * mm, f"Página {doc.page}")
        canvas.restoreState()

    # ── Story ────────────────────────────────────────────────────────────

    def _intro(self, title, reference, issued_at):
        return [
            Paragraph(title, self.custom_styles["Title"]),
            Paragraph(f"Fecha de emisión: {issued_at.strftime('%d/%m/%Y %H:%M')}",
                      self.custom_styles["Meta"]),
            Paragraph(month_label(reference), self.custom_styles["Month"]),
            Spacer(1, 6 * mm),
        ]

    def _table(self, head, body, foot, col_widths):
        data = [head] + body + [foot]
        table = Table(data, colWidths=col_widths, repeatRows=1)
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), DARK),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("BACKGROUND", (0, -1), (-1, -1), PRIME),
            ("TEXTCOLOR", (0, -1), (-1, -1), DARK),
            ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
            ("LINEBELOW", (0, 0), (-1, -2), 0.25, colors.lightgrey),
            ("TOPPADDING", (0, 0), (-1, -1), 5),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
        ]
        for i in range(1, len(body) + 1):
            if i % 2 == 0:
                style.append(("BACKGROUND", (0, i), (-1, i), ROW_ALT))
        table.setStyle(TableStyle(style))
        return table

    def _signature(self):
        return [
            Spacer(1, 20 * mm),
            Paragraph("__________________________", self.custom_styles["Signature"]),
            Paragraph(escape(self.signatory), self.custom_styles["Signature"]),
            Paragraph(escape(self.signatory_title), self.custom_styles["Signature"]),
        ]

    def build(self, title, reference, head, body, foot, col_widths, issued_at=None):
        issued_at = issued_at or datetime.now()
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=HEADER_HEIGHT + 10 * mm,
            bottomMargin=18 * mm,
            title=f"{title} {month_label(reference)}",
            author=self.brand_name,
        )
        story = self._intro(title, reference, issued_at)
        story.append(self._table(head, body, foot, col_widths))
        story.extend(self._signature())
        doc.build(story, onFirstPage=self._draw_header, onLaterPages=self._draw_header)
        return buffer.getvalue()

    def cell(self, text):
        return Paragraph(escape(text or "-"), self.custom_styles["Cell"])


def build_cash_report(transactions, totals, reference, branding=None, issued_at=None) -> bytes:
    """Cash movements of one month with the month's balance as the totals row."""
    builder = ReportBuilder(branding)
    body = [
        [t.date.isoformat(), builder.cell(t.detail), KIND_LABELS[t.kind].upper(), f"${t.amount:.2f}"]
        for t in transactions
    ]
    foot = ["", "TOTALES", "", f"${totals.balance:.2f}"]
    return builder.build(
        "Reporte Caja Chica", reference,
        head=["Fecha", "Detalle", "Tipo", "Monto"],
        body=body, foot=foot,
        col_widths=[28 * mm, 92 * mm, 32 * mm, 30 * mm],
        issued_at=issued_at,
    )


def build_inventory_report(entries, totals, reference, branding=None, issued_at=None) -> bytes:
    """Inventory movements of one month with the running stock as the totals row."""
    builder = ReportBuilder(branding)
    body = [
        [
            e.date.isoformat(),
            builder.cell(e.product),
            MOVEMENT_LABELS[e.movement].upper(),
            str(e.quantity),
            REASON_LABELS[e.reason] if e.reason else "-",
            builder.cell(e.order_number),
        ]
        for e in entries
    ]
    foot = ["", "STOCK TOTAL", "", str(totals.running_stock), "", ""]
    return builder.build(
        "Reporte Inventario", reference,
        head=["Fecha", "Producto", "Tipo", "Cant", "Motivo", "Orden"],
        body=body, foot=foot,
        col_widths=[26 * mm, 50 * mm, 24 * mm, 18 * mm, 26 * mm, 38 * mm],
        issued_at=issued_at,
    )
