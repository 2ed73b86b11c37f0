"""
Shared PDF layout for ReportLab documents.
Draws the branded header and the certification footer on every page.
"""
import logging
from copy import deepcopy
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import SimpleDocTemplate

from avotrace.utils.datetime_utils import utcnow


logger = logging.getLogger(__name__)

CURRENT_FILE = Path(__file__).resolve()
# 'backend' directory (avotrace/utils/pdf_layout.py -> 3 levels up)
BACKEND_ROOT = CURRENT_FILE.parents[2] if len(CURRENT_FILE.parents) > 2 else None

DEFAULT_DOC_KWARGS = {
    "pagesize": A4,
    "leftMargin": 20 * mm,
    "rightMargin": 20 * mm,
}

DEFAULT_BRANDING: Dict[str, Any] = {
    "company_name": "Convo Bio",
    "company_tagline": "Traçabilité d'Avocat",
    "company_logo_path": None,
    "company_logo_max_width": 40 * mm,
    "company_logo_max_height": 20 * mm,
    "certification_text": "Ce document est généré électroniquement et certifié conforme aux normes Convo Bio.",
    "verification_text": "Pour vérifier l'authenticité, scanner le code-barres ou visiter www.convobio.com/verify",
    "primary_color": colors.HexColor("#2E7D32"),
    "accent_color": colors.HexColor("#8BC34A"),
    "text_color": colors.HexColor("#2C3E50"),
    "muted_text_color": colors.HexColor("#607D8B"),
    "header_bg_color": colors.white,
    "header_bar_color": colors.HexColor("#E0E0E0"),
    "footer_bg_color": colors.HexColor("#1B5E20"),
    "footer_wave_color": colors.HexColor("#2E7D32"),
    "header_height": 28 * mm,
    "footer_height": 20 * mm,
    "show_page_number": True,
    "generated_at": None,
}


def branding_from_settings(settings) -> Dict[str, Any]:
    """Branding overrides taken from the application settings"""
    website = settings.COMPANY_WEBSITE
    return {
        "company_name": settings.COMPANY_NAME,
        "company_tagline": settings.COMPANY_TAGLINE,
        "company_logo_path": settings.COMPANY_LOGO_PATH,
        "certification_text": (
            f"Ce document est généré électroniquement et certifié conforme aux normes {settings.COMPANY_NAME}."
        ),
        "verification_text": (
            f"Pour vérifier l'authenticité, scanner le code-barres ou visiter {website}/verify"
        ),
    }


def _resolve_candidate_paths(path_value: str) -> Tuple[Path, ...]:
    if not path_value:
        return tuple()

    candidates = []
    initial = Path(path_value).expanduser()
    if initial.is_file():
        candidates.append(initial)

    if BACKEND_ROOT:
        backend_candidate = (BACKEND_ROOT / path_value).resolve()
        if backend_candidate.is_file():
            candidates.append(backend_candidate)
        static_candidate = (BACKEND_ROOT / "static" / path_value).resolve()
        if static_candidate.is_file():
            candidates.append(static_candidate)

    return tuple(dict.fromkeys(candidates))


def _load_logo_reader(path_value: Optional[str]) -> Optional[ImageReader]:
    if not path_value:
        return None

    for candidate in _resolve_candidate_paths(str(path_value).strip()):
        try:
            return ImageReader(str(candidate))
        except Exception as e:
            logger.warning(f"Could not load logo from {candidate}: {e}")
    logger.warning(f"Logo {path_value} not found, header drawn without it")
    return None


def _scale_image(image_reader: ImageReader, max_width: float, max_height: float) -> Tuple[float, float]:
    width, height = image_reader.getSize()
    ratio = min(max_width / width, max_height / height)
    return width * ratio, height * ratio


def prepare_branding(user_branding: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    branding = deepcopy(DEFAULT_BRANDING)
    if user_branding:
        for key, value in user_branding.items():
            if value is not None:
                branding[key] = value

    branding["generated_at"] = branding.get("generated_at") or utcnow()
    branding["company_logo"] = _load_logo_reader(branding.get("company_logo_path"))
    return branding


def create_document(buffer: BytesIO, branding: Optional[Dict[str, Any]] = None, doc_kwargs: Optional[Dict[str, Any]] = None):
    branding_cfg = prepare_branding(branding)
    merged_kwargs = {**DEFAULT_DOC_KWARGS}
    if doc_kwargs:
        merged_kwargs.update(doc_kwargs)

    merged_kwargs.setdefault("topMargin", branding_cfg["header_height"] + 10 * mm)
    merged_kwargs.setdefault("bottomMargin", branding_cfg["footer_height"] + 10 * mm)

    doc = SimpleDocTemplate(buffer, **merged_kwargs)
    return doc, branding_cfg


def _draw_header(canvas_obj, doc, branding: Dict[str, Any]):
    width, height = doc.pagesize
    header_height = branding["header_height"]
    header_bottom = height - header_height
    left = max(doc.leftMargin, 14 * mm)
    right = max(doc.rightMargin, 12 * mm)

    canvas_obj.saveState()

    canvas_obj.setFillColor(branding["header_bg_color"])
    canvas_obj.rect(0, header_bottom, width, header_height, stroke=0, fill=1)

    # Accent bar under the header
    canvas_obj.setFillColor(branding["primary_color"])
    canvas_obj.rect(left, header_bottom + 1.5, width - left - right, 1.5, stroke=0, fill=1)

    text_left = left
    logo = branding.get("company_logo")
    if logo is not None:
        logo_w, logo_h = _scale_image(logo, branding["company_logo_max_width"], branding["company_logo_max_height"])
        canvas_obj.drawImage(
            logo,
            left,
            height - 6 * mm - logo_h,
            width=logo_w,
            height=logo_h,
            mask="auto",
            preserveAspectRatio=True,
        )
        text_left = left + logo_w + 10

    name_y = height - 13 * mm
    canvas_obj.setFont("Helvetica-Bold", 18)
    canvas_obj.setFillColor(branding["primary_color"])
    canvas_obj.drawString(text_left, name_y, branding.get("company_name") or "")

    tagline = branding.get("company_tagline")
    if tagline:
        canvas_obj.setFont("Helvetica", 10)
        canvas_obj.setFillColor(branding["muted_text_color"])
        canvas_obj.drawString(text_left, name_y - 14, tagline)

    canvas_obj.restoreState()


def _draw_footer(canvas_obj, doc, branding: Dict[str, Any]):
    width, _ = doc.pagesize
    footer_height = branding["footer_height"]
    canvas_obj.saveState()

    # Darker base wave
    path = canvas_obj.beginPath()
    path.moveTo(0, 0)
    path.lineTo(0, footer_height * 0.7)
    path.curveTo(
        width * 0.2,
        footer_height * 1.1,
        width * 0.4,
        footer_height * 0.5,
        width * 0.6,
        footer_height * 0.85,
    )
    path.curveTo(
        width * 0.8,
        footer_height * 1.15,
        width * 0.92,
        footer_height * 0.6,
        width,
        footer_height * 0.95,
    )
    path.lineTo(width, 0)
    path.close()
    canvas_obj.setFillColor(branding["footer_bg_color"])
    canvas_obj.drawPath(path, stroke=0, fill=1)

    # Lighter wave offset
    path2 = canvas_obj.beginPath()
    path2.moveTo(0, 0)
    path2.lineTo(0, footer_height * 0.3)
    path2.curveTo(
        width * 0.15,
        footer_height * 0.6,
        width * 0.35,
        footer_height * 0.1,
        width * 0.55,
        footer_height * 0.4,
    )
    path2.curveTo(
        width * 0.75,
        footer_height * 0.7,
        width * 0.93,
        footer_height * 0.2,
        width,
        footer_height * 0.45,
    )
    path2.lineTo(width, 0)
    path2.close()
    canvas_obj.setFillColor(branding["footer_wave_color"])
    canvas_obj.drawPath(path2, stroke=0, fill=1)

    canvas_obj.setFillColor(colors.white)
    canvas_obj.setFont("Helvetica", 7.5)
    canvas_obj.drawCentredString(width / 2, footer_height * 0.45, branding.get("certification_text") or "")
    canvas_obj.drawCentredString(width / 2, footer_height * 0.45 - 10, branding.get("verification_text") or "")

    if branding.get("show_page_number", True):
        canvas_obj.setFont("Helvetica-Bold", 7.5)
        canvas_obj.drawRightString(width - doc.rightMargin, 4 * mm, f"Page {canvas_obj.getPageNumber()}")

    canvas_obj.restoreState()


def build_pdf(doc, story, branding: Dict[str, Any]):
    def _on_page(canvas_obj, doc_obj):
        _draw_header(canvas_obj, doc_obj, branding)
        _draw_footer(canvas_obj, doc_obj, branding)

    doc.build(
        story,
        onFirstPage=_on_page,
        onLaterPages=_on_page,
    )
