#!/usr/bin/env python3
"""
Utility functions for FairShare
"""

import re
import math
import mimetypes
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path
from typing import Any, Optional

from config import CURRENCY_SYMBOL, DISPLAY_QUANTIZE
from constants import ALLOWED_IMAGE_EXTENSIONS


def validate_image_path(image_path: str) -> bool:
    """Image path validation with basic security checks"""
    if not isinstance(image_path, str):
        print("Image path must be a string")
        return False

    path = Path(image_path)

    if '..' in path.parts:
        print(f"Security risk: Invalid path pattern: {image_path}")
        return False

    if not path.exists():
        print(f"File not found: {image_path}")
        return False

    if not path.is_file():
        print(f"Path is not a file: {image_path}")
        return False

    if path.suffix.lower() not in ALLOWED_IMAGE_EXTENSIONS:
        print(f"Unsupported file extension: {path.suffix}")
        return False

    mime_type, _ = mimetypes.guess_type(str(path))
    if mime_type and not mime_type.startswith('image/'):
        print(f"Invalid MIME type: {mime_type}")
        return False

    return True


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for safe file operations"""
    if not isinstance(filename, str):
        return "unnamed_file"

    filename = re.sub(r'[<>:"/\\|?*\x00-\x1f]', '', filename)
    filename = filename.replace(' ', '_')

    if len(filename) > 200:
        filename = filename[:200]

    if not filename.strip():
        filename = "unnamed_file"

    return filename


def dated_filename(prefix: str, extension: str, today: Optional[date] = None) -> str:
    """File name stamped with the current date, e.g. fairshare-2025-01-31.png"""
    today = today or date.today()
    return sanitize_filename(f"{prefix}-{today.isoformat()}.{extension.lstrip('.')}")


def round_currency(amount: float) -> float:
    """Round half-up to two decimals, for display only"""
    return float(Decimal(str(amount)).quantize(DISPLAY_QUANTIZE, rounding=ROUND_HALF_UP))


def format_currency(amount: float, symbol: str = CURRENCY_SYMBOL) -> str:
    """Format currency amount with the configured symbol"""
    if not isinstance(amount, (int, float)) or isinstance(amount, bool):
        return f"{symbol}0.00"
    rounded = round_currency(amount)
    if rounded == 0:
        rounded = 0.0
    return f"{symbol}{rounded:.2f}"


def coerce_amount(value: Any) -> float:
    """Coerce user input to a float, falling back to zero"""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        number = try_parse_float(str(value))
        if number is None:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def try_parse_int(value: str) -> Optional[int]:
    """Safely parse integer from string"""
    try:
        return int(value.strip())
    except (AttributeError, ValueError):
        return None


def try_parse_float(value: str) -> Optional[float]:
    """Safely parse float from string"""
    try:
        return float(value.strip().replace(',', '.'))
    except (AttributeError, ValueError):
        return None


def validate_menu_choice(choice: str, valid_choices: list[str]) -> Optional[str]:
    """Validate a menu choice against allowed options"""
    if not isinstance(choice, str):
        return None
    choice = choice.strip()
    return choice if choice in set(valid_choices) else None


def ensure_directory_exists(directory: str) -> bool:
    """Ensure a directory exists, create it if it doesn't"""
    try:
        Path(directory).mkdir(parents=True, exist_ok=True)
        return True
    except OSError as e:
        print(f"Failed to create directory {directory}: {e}")
        return False


def clean_text_for_display(text: str, max_length: int = 100) -> str:
    """Clean text for safe display in UI"""
    if not isinstance(text, str):
        return ""

    text = re.sub(r'[\x00-\x1f\x7f-\x9f]', '', text)
    text = ' '.join(text.split())

    if len(text) > max_length:
        text = text[:max_length-3] + "..."

    return text
