"""
Receipt export module for FairShare
Renders the split as a shareable PNG receipt
"""

from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from config import EXPORT_DIR, RECEIPT_QR_SIZE, RECEIPT_WIDTH
from constants import DEFAULT_PLATFORM, MODE_ITEMIZED, PLATFORM_THEMES
from data_models import Allocation, Bill
from qr_upload import QRUploadError, decode_qr_image
from utils import clean_text_for_display, dated_filename, ensure_directory_exists, format_currency

Color = Tuple[int, int, int]

MARGIN = 32
PADDING = 24
ROW_HEIGHT = 34
TEXT_COLOR = (31, 41, 55)
MUTED_COLOR = (107, 114, 128)
PAID_COLOR = (22, 163, 74)
CARD_COLOR = (255, 255, 255)


class ReceiptExportError(Exception):
    """The receipt image could not be produced"""


def _money(amount: float) -> str:
    # the default font has no glyph for most currency symbols
    return format_currency(amount, symbol='')


def vertical_gradient(width: int, height: int, top: Color, bottom: Color) -> Image.Image:
    """Background image fading from top color to bottom color"""
    weights = np.linspace(0.0, 1.0, height)[:, None]
    rows = (1 - weights) * np.array(top, dtype=float) + weights * np.array(bottom, dtype=float)
    pixels = np.repeat(rows[:, None, :], width, axis=1).round().astype(np.uint8)
    return Image.fromarray(pixels)


def _load_font(size: int):
    return ImageFont.load_default(size=size)


def _table(bill, allocation: Allocation, mode: str) -> Tuple[List[str], List[List[str]], List[bool]]:
    if mode == MODE_ITEMIZED:
        header = ['Name', 'Food', 'Discount', 'Fees', 'To pay', '']
        rows = [
            [clean_text_for_display(s.name, 18), _money(s.food), _money(s.discount_share),
             _money(s.fee_share), _money(s.net), 'PAID' if s.paid else '-']
            for s in allocation.shares
        ]
    else:
        header = ['Name', 'Purchase', 'To pay', '']
        rows = [
            [clean_text_for_display(s.name, 24), _money(s.food), _money(s.net), 'PAID' if s.paid else '-']
            for s in allocation.shares
        ]
    return header, rows, [s.paid for s in allocation.shares]


def _summary(bill, allocation: Allocation, mode: str) -> List[Tuple[str, str]]:
    totals = allocation.totals
    if totals is None:
        return [('No participants yet', '')]

    if mode == MODE_ITEMIZED:
        config = bill.bill_config
        lines = [
            ('Total food', _money(totals.total_food)),
            ('Discount on food', _money(totals.effective_food_discount)),
            ('Delivery + service', _money(config.total_fees)),
        ]
        if totals.effective_fee_discount:
            lines.append(('Discount on fees', _money(totals.effective_fee_discount)))
        lines.append(('Fees per person', _money(totals.fee_per_person)))
    else:
        lines = [
            ('Total discount', _money(totals.effective_food_discount)),
            ('Total purchase', _money(totals.total_food)),
        ]
    lines.append(('Total to pay', _money(totals.grand_total)))
    lines.append(('Still outstanding', _money(allocation.outstanding)))
    return lines


def render_receipt(bill, allocation: Allocation, mode: str, width: int = RECEIPT_WIDTH,
                   today: Optional[date] = None) -> Image.Image:
    """Draw the receipt for the current allocation"""
    platform = bill.platform if isinstance(bill, Bill) else DEFAULT_PLATFORM
    top, bottom, accent = PLATFORM_THEMES.get(platform, PLATFORM_THEMES[DEFAULT_PLATFORM])

    qr_image = None
    if isinstance(bill, Bill) and bill.qr_code:
        try:
            qr_image = decode_qr_image(bill.qr_code).convert('RGB')
            qr_image.thumbnail((RECEIPT_QR_SIZE, RECEIPT_QR_SIZE))
        except QRUploadError as e:
            print(f"⚠ Skipping QR code: {e}")

    header, rows, paid_flags = _table(bill, allocation, mode)
    summary = _summary(bill, allocation, mode)

    title_font = _load_font(30)
    body_font = _load_font(18)

    height = (
        MARGIN * 2 + PADDING * 2
        + 60
        + ROW_HEIGHT * (len(rows) + 1)
        + 20
        + ROW_HEIGHT * len(summary)
        + (qr_image.height + PADDING if qr_image is not None else 0)
    )

    image = vertical_gradient(width, height, top, bottom)
    draw = ImageDraw.Draw(image)
    draw.rounded_rectangle(
        (MARGIN, MARGIN, width - MARGIN, height - MARGIN),
        radius=18, fill=CARD_COLOR, outline=accent, width=2,
    )

    left = MARGIN + PADDING
    right = width - MARGIN - PADDING
    y = MARGIN + PADDING

    draw.text((left, y), f"FairShare - {(today or date.today()).isoformat()}", font=title_font, fill=accent)
    y += 60

    # first column is wider for names
    column_width = (right - left) / (len(header) + 1)
    column_x = [left] + [int(left + column_width * (i + 2)) for i in range(len(header) - 1)]

    for x, label in zip(column_x, header):
        draw.text((x, y), label, font=body_font, fill=MUTED_COLOR)
    y += ROW_HEIGHT
    draw.line((left, y - 6, right, y - 6), fill=accent, width=1)

    for row, paid in zip(rows, paid_flags):
        for i, (x, value) in enumerate(zip(column_x, row)):
            color = PAID_COLOR if paid and i == len(row) - 1 else TEXT_COLOR
            draw.text((x, y), value, font=body_font, fill=color)
        y += ROW_HEIGHT

    y += 20
    draw.line((left, y - 10, right, y - 10), fill=accent, width=1)
    for label, value in summary:
        draw.text((left, y), label, font=body_font, fill=TEXT_COLOR)
        draw.text((int(right - draw.textlength(value, font=body_font)), y), value, font=body_font, fill=TEXT_COLOR)
        y += ROW_HEIGHT

    if qr_image is not None:
        image.paste(qr_image, (int((width - qr_image.width) / 2), y + PADDING // 2))

    return image


def export_receipt(bill, allocation: Allocation, mode: str,
                   export_dir: Union[str, Path] = EXPORT_DIR,
                   today: Optional[date] = None) -> Path:
    """Render the receipt and save it as a PNG named by date"""
    if not ensure_directory_exists(str(export_dir)):
        raise ReceiptExportError(f"Export directory is not writable: {export_dir}")

    target = Path(export_dir) / dated_filename('fairshare', 'png', today)
    try:
        image = render_receipt(bill, allocation, mode, today=today)
        image.save(target, format='PNG')
    except (OSError, ValueError) as e:
        raise ReceiptExportError(f"Could not export receipt: {e}") from e
    return target
