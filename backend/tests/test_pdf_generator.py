from datetime import datetime, timedelta

import pytest

from avotrace.core.exceptions import RenderError
from avotrace.utils.pdf_generator import ACTIVITY_LABELS, generate_lot_report

HARVEST_DATE = datetime(2024, 3, 1, 8, 0, 0)
GENERATED_AT = datetime(2024, 3, 5, 14, 30)


@pytest.fixture
def lot(service, memory_farm):
    return service.create_lot(
        {"farm_id": memory_farm.id, "harvest_date": HARVEST_DATE, "initial_quantity": 1000},
        operator_name="Youssef",
    )


def test_report_with_timeline(service, repository, memory_farm, lot):
    service.record_activity(lot.id, "package", HARVEST_DATE + timedelta(hours=6), 980, "Amina", notes="Caisses 10 kg")
    service.record_activity(lot.id, "ship", HARVEST_DATE + timedelta(days=1), 980, "Karim & fils")
    activities = repository.get_lot_activities_by_lot(lot.id)

    pdf = generate_lot_report(lot, memory_farm, activities, generated_at=GENERATED_AT)

    assert pdf.startswith(b"%PDF")
    assert pdf.rstrip().endswith(b"%%EOF")


def test_report_without_activities(memory_farm, lot):
    pdf = generate_lot_report(lot, memory_farm, [], generated_at=GENERATED_AT)
    assert pdf.startswith(b"%PDF")


def test_report_without_farm(lot):
    pdf = generate_lot_report(lot, None, [])
    assert pdf.startswith(b"%PDF")


def test_report_fails_when_barcode_fails(memory_farm, lot):
    lot.lot_number = ""
    with pytest.raises(RenderError):
        generate_lot_report(lot, memory_farm, [])


def test_every_activity_type_has_a_label():
    assert set(ACTIVITY_LABELS) == {"harvest", "package", "cool", "ship", "deliver"}
