"""
Code 128 barcodes for lot labels and reports
"""
import base64
import logging
from io import BytesIO
from typing import Any, Dict

import barcode
from barcode.writer import ImageWriter

from avotrace.core.exceptions import RenderError
from avotrace.utils.datetime_utils import format_date_fr

logger = logging.getLogger(__name__)

# Writer settings tuned for handheld scanners: wide modules, text under the bars
WRITER_OPTIONS = {
    "write_text": True,
    "module_width": 0.3,
    "module_height": 15.0,
    "quiet_zone": 4.0,
    "font_size": 10,
    "text_distance": 5.0,
    "background": "white",
    "foreground": "black",
    "dpi": 300,
}


def _lot_number_of(lot) -> str:
    return getattr(lot, "lot_number", lot)


def render(lot) -> bytes:
    """PNG bytes of the Code 128 barcode for a lot (or a bare lot number)"""
    lot_number = _lot_number_of(lot)
    if not isinstance(lot_number, str) or not lot_number.strip():
        raise RenderError("Cannot render a barcode without a lot number")
    if not lot_number.isascii() or not lot_number.isprintable():
        raise RenderError(f"Lot number {lot_number!r} cannot be encoded as Code 128")

    try:
        code128 = barcode.get_barcode_class("code128")
        image = code128(lot_number, writer=ImageWriter()).render(dict(WRITER_OPTIONS))
        buffer = BytesIO()
        image.save(buffer, format="PNG")
    except Exception as exc:
        logger.error(f"Barcode rendering failed for {lot_number}: {exc}")
        raise RenderError(f"Barcode rendering failed for {lot_number}: {exc}") from exc
    return buffer.getvalue()


def render_data_uri(lot) -> str:
    encoded = base64.b64encode(render(lot)).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def barcode_payload(lot, farm_name: str) -> Dict[str, Any]:
    """Label data served to the frontend: image, lot number, farm and harvest date"""
    return {
        "barcode_image": render_data_uri(lot),
        "lot_number": lot.lot_number,
        "farm_name": farm_name,
        "harvest_date": format_date_fr(lot.harvest_date),
    }
