"""PDF quote export using reportlab."""

import io
import logging
from datetime import date
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from tourcalc.export.rows import UNNAMED_TRIP, QuoteSection, money, quote_sections
from tourcalc.models.costs import CostBreakdown
from tourcalc.models.trip import TripParameters

logger = logging.getLogger(__name__)

BRAND_COLOR = colors.HexColor("#6D28D9")


def _section_table(section: QuoteSection) -> Table:
    table = Table([section.header, *section.rows], repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), BRAND_COLOR),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("ALIGN", (-1, 1), (-1, -1), "RIGHT"),
    ]))
    return table


def build_pdf(
    params: TripParameters, breakdown: CostBreakdown, generated_on: date | None = None
) -> bytes:
    """Render the quote as a PDF document.

    Args:
        params: Snapshot the breakdown was computed from
        breakdown: Computed breakdown; its values are written as-is
        generated_on: Date printed in the header (defaults to today)

    Returns:
        PDF bytes
    """
    generated_on = generated_on or date.today()
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, topMargin=0.6 * inch, bottomMargin=0.6 * inch)
    styles = getSampleStyleSheet()
    elements = []

    elements.append(Paragraph("TourCalc Pro - Detailed quote", styles["Title"]))
    trip_name = escape(params.trip_name or UNNAMED_TRIP)
    elements.append(Paragraph(f"<b>{trip_name}</b>", styles["Heading2"]))
    elements.append(Paragraph(
        f"Date: {generated_on.isoformat()} | Participants: {params.participant_count} | "
        f"Duration: {params.duration_days} days",
        styles["Normal"],
    ))
    elements.append(Spacer(1, 0.2 * inch))

    # Summary is already printed in the header
    for section in quote_sections(params, breakdown)[1:]:
        if not section.rows:
            continue
        elements.append(Paragraph(f"<b>{section.title.title()}</b>", styles["Heading3"]))
        elements.append(_section_table(section))
        elements.append(Spacer(1, 0.15 * inch))

    elements.append(Paragraph("<b>Suggested price</b>", styles["Heading2"]))
    elements.append(Paragraph(
        f"EUR {money(breakdown.suggested_price_per_person)} per person "
        f"(cost EUR {money(breakdown.cost_per_person)}, margin {params.profit_margin_percent:g}%)",
        styles["Normal"],
    ))

    doc.build(elements)
    logger.info(f"Rendered PDF quote for '{params.trip_name}'")
    return buf.getvalue()
