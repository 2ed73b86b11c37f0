import base64
from datetime import datetime
from types import SimpleNamespace

import pytest

from avotrace.core.exceptions import RenderError
from avotrace.utils import barcode

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _lot(lot_number="AV-240301-001"):
    return SimpleNamespace(lot_number=lot_number, harvest_date=datetime(2024, 3, 1, 8, 0))


def test_render_returns_png():
    assert barcode.render(_lot()).startswith(PNG_SIGNATURE)


def test_render_is_deterministic():
    assert barcode.render(_lot()) == barcode.render(_lot())


def test_render_accepts_bare_lot_number():
    assert barcode.render("AV-240301-001") == barcode.render(_lot())


def test_different_numbers_give_different_images():
    assert barcode.render(_lot("AV-240301-001")) != barcode.render(_lot("AV-240301-002"))


@pytest.mark.parametrize("lot_number", ["", "   ", None, "AV-2403é1-001"])
def test_render_rejects_unencodable_numbers(lot_number):
    with pytest.raises(RenderError):
        barcode.render(_lot(lot_number))


def test_data_uri():
    uri = barcode.render_data_uri(_lot())
    prefix = "data:image/png;base64,"
    assert uri.startswith(prefix)
    assert base64.b64decode(uri[len(prefix):]).startswith(PNG_SIGNATURE)


def test_payload():
    payload = barcode.barcode_payload(_lot(), "Ferme Atlas")

    assert payload["lot_number"] == "AV-240301-001"
    assert payload["farm_name"] == "Ferme Atlas"
    assert payload["harvest_date"] == "01/03/2024"
    assert payload["barcode_image"].startswith("data:image/png;base64,")
