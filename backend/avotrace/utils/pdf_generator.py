"""
PDF Generator utilities using ReportLab
"""
import logging
from datetime import datetime
from io import BytesIO
from typing import Any, Dict, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Image, Paragraph, Spacer, Table, TableStyle

from avotrace.core.config import settings
from avotrace.core.exceptions import AvoTraceError, RenderError
from avotrace.models.traceability import ActivityType
from avotrace.utils import barcode
from avotrace.utils.datetime_utils import format_date_fr, format_datetime_fr, utcnow
from avotrace.utils.pdf_layout import branding_from_settings, build_pdf, create_document

logger = logging.getLogger(__name__)

ACTIVITY_LABELS = {
    ActivityType.HARVEST.value: "Récolté",
    ActivityType.PACKAGE.value: "Emballé",
    ActivityType.COOL.value: "Refroidi",
    ActivityType.SHIP.value: "Expédié",
    ActivityType.DELIVER.value: "Livré",
}

BARCODE_WIDTH = 80 * mm


def _barcode_flowable(lot) -> Image:
    png = barcode.render(lot)
    width, height = ImageReader(BytesIO(png)).getSize()
    image = Image(BytesIO(png), width=BARCODE_WIDTH, height=BARCODE_WIDTH * height / width)
    image.hAlign = "CENTER"
    return image


def _quantity_kg(value) -> str:
    return f"{value} kg" if value is not None else "-"


def generate_lot_report(
    lot,
    farm,
    activities: Sequence[Any],
    generated_at: Optional[datetime] = None,
    branding: Optional[Dict[str, Any]] = None,
) -> bytes:
    """
    Traceability report of a lot

    Args:
        lot: Lot model (or any object with the same attributes)
        farm: Farm the lot belongs to, None if it no longer exists
        activities: activities of the lot, any order
        generated_at: timestamp printed on the report (default: now, UTC)
        branding: overrides for the header/footer branding

    Returns:
        PDF bytes
    """
    generated_at = generated_at or utcnow()
    branding_cfg = {**branding_from_settings(settings), **(branding or {}), "generated_at": generated_at}

    buffer = BytesIO()
    doc, branding_config = create_document(buffer, branding=branding_cfg)

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'ReportTitle',
        parent=styles['Heading1'],
        fontSize=18,
        textColor=branding_config["primary_color"],
        spaceAfter=2,
        alignment=TA_CENTER
    )
    subtitle_style = ParagraphStyle(
        'ReportSubtitle',
        parent=styles['Normal'],
        fontSize=9,
        textColor=branding_config["muted_text_color"],
        alignment=TA_CENTER,
    )
    lot_number_style = ParagraphStyle(
        'LotNumber',
        parent=styles['Normal'],
        fontName='Courier-Bold',
        fontSize=16,
        leading=20,
        alignment=TA_CENTER,
    )
    section_style = ParagraphStyle(
        'SectionTitle',
        parent=styles['Heading2'],
        fontSize=12,
        textColor=branding_config["primary_color"],
        spaceBefore=4,
        spaceAfter=4,
    )
    normal_style = ParagraphStyle(
        'ReportNormal',
        parent=styles['Normal'],
        fontSize=9,
        leading=11,
    )

    story = [
        Paragraph("RAPPORT DE TRAÇABILITÉ", title_style),
        Paragraph(f"Généré le: {format_datetime_fr(generated_at)}", subtitle_style),
        Spacer(1, 6 * mm),
        _barcode_flowable(lot),
        Spacer(1, 2 * mm),
        Paragraph(escape(lot.lot_number), lot_number_style),
        Spacer(1, 6 * mm),
    ]

    # Lot information, two columns
    farm_name = escape(farm.name) if farm else "-"
    farm_code = escape(farm.code) if farm else "-"
    col_width = doc.width / 2
    info_table = Table(
        [
            [
                Paragraph(f"<b>Ferme:</b> {farm_name}", normal_style),
                Paragraph(f"<b>Code Ferme:</b> {farm_code}", normal_style),
            ],
            [
                Paragraph(f"<b>Date Récolte:</b> {format_date_fr(lot.harvest_date)}", normal_style),
                Paragraph(f"<b>Quantité:</b> {_quantity_kg(lot.initial_quantity)}", normal_style),
            ],
        ],
        colWidths=[col_width, col_width],
    )
    info_table.setStyle(TableStyle([
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('BACKGROUND', (0, 0), (-1, -1), colors.HexColor('#F1F8E9')),
        ('BOX', (0, 0), (-1, -1), 0.5, colors.HexColor('#BDBDBD')),
        ('LEFTPADDING', (0, 0), (-1, -1), 6),
        ('RIGHTPADDING', (0, 0), (-1, -1), 6),
        ('TOPPADDING', (0, 0), (-1, -1), 5),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
    ]))
    story.append(Paragraph("INFORMATION DU LOT", section_style))
    story.append(info_table)
    story.append(Spacer(1, 6 * mm))

    # Timeline, oldest first
    ordered = sorted(activities, key=lambda a: (a.date_performed, a.id or 0))
    timeline_data = [['Étape', 'Date', 'Opérateur', 'Notes']]
    for activity in ordered:
        timeline_data.append([
            ACTIVITY_LABELS.get(activity.activity_type, activity.activity_type),
            format_datetime_fr(activity.date_performed),
            Paragraph(escape(activity.operator_name or ""), normal_style),
            Paragraph(escape(activity.notes or "-"), normal_style),
        ])

    timeline_table = Table(
        timeline_data,
        colWidths=[doc.width * 0.15, doc.width * 0.22, doc.width * 0.25, doc.width * 0.38],
        repeatRows=1,
    )
    timeline_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), branding_config["primary_color"]),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, 0), 10),
        ('FONTSIZE', (0, 1), (-1, -1), 9),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#BDBDBD')),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#FAFAFA')]),
    ]))
    story.append(Paragraph("CHRONOLOGIE DE TRAÇABILITÉ", section_style))
    story.append(timeline_table)
    story.append(Spacer(1, 12 * mm))

    # Signatures: operator of the last step, and the receiving client
    operator_signature = escape(ordered[-1].operator_name) if ordered else ""
    signature_table = Table(
        [
            ['Signature Opérateur:', 'Signature Réception:'],
            [operator_signature, 'Client'],
        ],
        colWidths=[col_width, col_width],
    )
    signature_table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('VALIGN', (0, 0), (-1, -1), 'BOTTOM'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
        ('BOTTOMPADDING', (0, 1), (-1, 1), 30),
    ]))
    story.append(signature_table)

    try:
        build_pdf(doc, story, branding_config)
    except AvoTraceError:
        raise
    except Exception as exc:
        logger.error(f"PDF build failed for lot {lot.lot_number}: {exc}", exc_info=True)
        raise RenderError(f"PDF generation failed for lot {lot.lot_number}: {exc}") from exc

    return buffer.getvalue()
