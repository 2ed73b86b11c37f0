import re
from datetime import datetime, timedelta, timezone

import pytest

from avotrace.core.exceptions import ConflictError, LotNumberExhaustedError
from avotrace.services.lot_numbers import LotNumberGenerator, date_code, format_lot_number

HARVEST_DATE = datetime(2024, 3, 1, 8, 0, 0)


def _add_lot(repository, farm_id, lot_number, harvest_date=HARVEST_DATE):
    return repository.create_lot(
        {
            "lot_number": lot_number,
            "farm_id": farm_id,
            "harvest_date": harvest_date,
            "initial_quantity": 100,
        }
    )


def test_generate_format(repository, memory_farm):
    number = LotNumberGenerator(repository).generate(memory_farm.id, HARVEST_DATE)

    assert number == "AV-240301-001"
    assert re.match(r"^AV-\d{6}-\d{3}$", number)


def test_date_code_uses_utc():
    # 23:30 in UTC-05:00 is already the next day in UTC
    late_evening = datetime(2024, 3, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    assert date_code(late_evening) == "240302"
    assert date_code(datetime(2024, 3, 1, 8, 0)) == "240301"


def test_sequence_is_global_across_farms(repository, memory_farm):
    other_farm = repository.create_farm({"name": "Ferme Souss", "location": "Agadir", "code": "FS-002"})
    _add_lot(repository, memory_farm.id, "AV-240301-001")
    _add_lot(repository, other_farm.id, "AV-240301-002")
    _add_lot(repository, memory_farm.id, "AV-240302-001", HARVEST_DATE + timedelta(days=1))

    number = LotNumberGenerator(repository).generate(other_farm.id, HARVEST_DATE)

    assert number == "AV-240301-003"


def test_taken_number_is_skipped(repository, memory_farm):
    # One lot on the day, but it holds sequence 002 (001 was never used or was removed)
    _add_lot(repository, memory_farm.id, "AV-240301-002")

    number = LotNumberGenerator(repository).generate(memory_farm.id, HARVEST_DATE)

    assert number == "AV-240301-003"


def test_custom_prefix(repository, memory_farm):
    number = LotNumberGenerator(repository, prefix="CB").generate(memory_farm.id, HARVEST_DATE)
    assert number == "CB-240301-001"


class _FullDayRepository:
    def count_lots_with_number_prefix(self, prefix):
        return 999

    def get_lot_by_number(self, lot_number):
        return None


def test_sequence_overflow_raises():
    with pytest.raises(LotNumberExhaustedError) as exc_info:
        LotNumberGenerator(_FullDayRepository()).generate(1, HARVEST_DATE)

    assert isinstance(exc_info.value, ConflictError)
    assert exc_info.value.status_code == 409


def test_format_lot_number_pads_to_three_digits():
    assert format_lot_number("AV", "240301", 7) == "AV-240301-007"
    assert format_lot_number("AV", "240301", 999) == "AV-240301-999"
