from datetime import date

from utils import (
    coerce_amount,
    dated_filename,
    format_currency,
    round_currency,
    sanitize_filename,
    try_parse_float,
    validate_image_path,
    validate_menu_choice,
)


def test_format_currency_rounds_only_for_display():
    assert format_currency(265) == "฿265.00"
    assert format_currency(2.675) == "฿2.68"
    assert format_currency(33.3333, symbol="$") == "$33.33"
    assert format_currency("oops") == "฿0.00"


def test_round_currency_half_up():
    assert round_currency(0.125) == 0.13
    assert round_currency(-0.0) == 0.0


def test_coerce_amount():
    assert coerce_amount("12.5") == 12.5
    assert coerce_amount(" 7,25 ") == 7.25
    assert coerce_amount("") == 0
    assert coerce_amount(None) == 0
    assert coerce_amount("abc") == 0
    assert coerce_amount(True) == 0
    assert coerce_amount(float("nan")) == 0
    assert coerce_amount(-3) == -3


def test_try_parse_float():
    assert try_parse_float("1,5") == 1.5
    assert try_parse_float("x") is None


def test_dated_filename():
    assert dated_filename("fairshare", ".png", date(2024, 12, 1)) == "fairshare-2024-12-01.png"


def test_sanitize_filename():
    assert sanitize_filename('my <bill>?.png') == "my_bill.png"
    assert sanitize_filename("") == "unnamed_file"


def test_validate_menu_choice():
    assert validate_menu_choice(" 2 ", ["1", "2"]) == "2"
    assert validate_menu_choice("9", ["1", "2"]) is None


def test_validate_image_path(qr_png, tmp_path):
    assert validate_image_path(str(qr_png)) is True
    assert validate_image_path(str(tmp_path / "missing.png")) is False
    assert validate_image_path(str(tmp_path)) is False
