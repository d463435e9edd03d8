from datetime import date

import pytest
from PIL import Image

from bill_splitter import get_strategy
from data_models import Bill, BillConfig, FlatBill, Participant
from qr_upload import load_qr_image
from receipt_export import ReceiptExportError, export_receipt, render_receipt, vertical_gradient


@pytest.fixture
def itemized_bill(sample_people, sample_config):
    return Bill(platform="grab", bill_config=sample_config, people=sample_people)


def test_gradient_runs_top_to_bottom():
    image = vertical_gradient(10, 5, (0, 0, 0), (200, 100, 50))

    assert image.size == (10, 5)
    assert image.getpixel((0, 0)) == (0, 0, 0)
    assert image.getpixel((9, 4)) == (200, 100, 50)
    assert image.getpixel((3, 2)) == (100, 50, 25)


def test_render_itemized_receipt(itemized_bill):
    allocation = get_strategy("itemized").allocate(itemized_bill)
    image = render_receipt(itemized_bill, allocation, "itemized", width=600)

    assert image.mode == "RGB"
    assert image.width == 600


def test_qr_code_makes_receipt_taller(itemized_bill, qr_png):
    allocation = get_strategy("itemized").allocate(itemized_bill)
    without_qr = render_receipt(itemized_bill, allocation, "itemized")

    itemized_bill.qr_code = load_qr_image(qr_png)
    with_qr = render_receipt(itemized_bill, allocation, "itemized")

    assert with_qr.height > without_qr.height


def test_unreadable_qr_is_skipped(itemized_bill, capsys):
    itemized_bill.qr_code = "data:image/png;base64,aGVsbG8="
    allocation = get_strategy("itemized").allocate(itemized_bill)

    render_receipt(itemized_bill, allocation, "itemized")

    assert "Skipping QR code" in capsys.readouterr().out


def test_render_empty_flat_receipt():
    bill = FlatBill()
    image = render_receipt(bill, get_strategy("flat").allocate(bill), "flat")

    assert image.height > 0


def test_export_named_by_date(tmp_path):
    bill = FlatBill(total_before=100, total_after=80, people=[Participant(id="a", name="Ann", amount=100, paid=True)])
    allocation = get_strategy("flat").allocate(bill)

    path = export_receipt(bill, allocation, "flat", export_dir=tmp_path, today=date(2025, 1, 31))

    assert path == tmp_path / "fairshare-2025-01-31.png"
    with Image.open(path) as saved:
        assert saved.format == "PNG"


def test_export_failure_is_wrapped(tmp_path, mocker):
    bill = Bill(bill_config=BillConfig())
    failing = mocker.patch("receipt_export.render_receipt")
    failing.return_value.save.side_effect = OSError("read-only file system")

    with pytest.raises(ReceiptExportError, match="read-only"):
        export_receipt(bill, get_strategy("itemized").allocate(bill), "itemized", export_dir=tmp_path)
