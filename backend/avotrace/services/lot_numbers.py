"""
Lot number allocation: ``AV-<YYMMDD>-<NNN>``.

The sequence is global across farms: NNN is one more than the number of lots
whose number already carries the same date code. Numbers left free by a
deleted lot, or taken by a concurrent writer, are skipped.
"""
import logging
import re
from datetime import datetime
from typing import Optional

from avotrace.core.config import settings
from avotrace.core.exceptions import LotNumberExhaustedError
from avotrace.repositories.base import LotRepository
from avotrace.utils.datetime_utils import to_utc_naive

logger = logging.getLogger(__name__)

MAX_SEQUENCE = 999

LOT_NUMBER_PATTERN = re.compile(r"^[A-Z]+-\d{6}-\d{3}$")


def date_code(on_date: datetime) -> str:
    """YYMMDD of the date, taken in UTC"""
    return to_utc_naive(on_date).strftime("%y%m%d")


def format_lot_number(prefix: str, code: str, sequence: int) -> str:
    return f"{prefix}-{code}-{sequence:03d}"


class LotNumberGenerator:
    def __init__(self, repository: LotRepository, prefix: Optional[str] = None):
        self.repository = repository
        self.prefix = prefix or settings.LOT_NUMBER_PREFIX

    def generate(self, farm_id: int, on_date: datetime) -> str:
        code = date_code(on_date)
        day_prefix = f"{self.prefix}-{code}"
        sequence = self.repository.count_lots_with_number_prefix(day_prefix) + 1

        while sequence <= MAX_SEQUENCE:
            candidate = format_lot_number(self.prefix, code, sequence)
            if self.repository.get_lot_by_number(candidate) is None:
                logger.debug(f"Allocated lot number {candidate} for farm {farm_id}")
                return candidate
            logger.info(f"Lot number {candidate} already taken, trying next sequence")
            sequence += 1

        raise LotNumberExhaustedError(
            f"No lot number left for {day_prefix}: sequence is limited to {MAX_SEQUENCE:03d}"
        )
