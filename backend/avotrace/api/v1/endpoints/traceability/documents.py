"""
Barcode and PDF report endpoints
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from avotrace.api.deps import get_lifecycle_service
from avotrace.schemas.traceability import BarcodeResponse
from avotrace.services.lot_lifecycle import LotLifecycleService
from avotrace.utils.barcode import barcode_payload
from avotrace.utils.pdf_generator import generate_lot_report

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/lots/{lot_id}/barcode", response_model=BarcodeResponse)
async def get_lot_barcode(lot_id: int, service: LotLifecycleService = Depends(get_lifecycle_service)):
    lot = service.get_lot(lot_id)
    farm = service.repository.get_farm(lot.farm_id)
    return barcode_payload(lot, farm.name if farm else "")


@router.get("/lots/{lot_id}/pdf")
async def get_lot_pdf(lot_id: int, service: LotLifecycleService = Depends(get_lifecycle_service)):
    """Traceability report of the lot as a downloadable PDF"""
    lot = service.get_lot(lot_id)
    farm = service.repository.get_farm(lot.farm_id)
    activities = service.repository.get_lot_activities_by_lot(lot_id)

    pdf_bytes = generate_lot_report(lot, farm, activities)
    logger.info(f"Generated report for lot {lot.lot_number} ({len(activities)} activities)")

    filename = f"lot-{lot.lot_number}.pdf"
    return StreamingResponse(
        iter([pdf_bytes]),
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
