"""
Centralized configuration for FairShare with environment
"""

import os
from decimal import Decimal

# Storage settings
STORAGE_PATH = os.getenv("FAIRSHARE_STORAGE_PATH", os.path.join(os.path.expanduser("~"), ".fairshare.json"))
DEFAULT_MODE = os.getenv("FAIRSHARE_DEFAULT_MODE", "itemized")

# Export settings
EXPORT_DIR = os.getenv("FAIRSHARE_EXPORT_DIR", ".")
RECEIPT_WIDTH = int(os.getenv("FAIRSHARE_RECEIPT_WIDTH", "720"))
RECEIPT_QR_SIZE = int(os.getenv("FAIRSHARE_RECEIPT_QR_SIZE", "220"))

# Display
CURRENCY_SYMBOL = os.getenv("FAIRSHARE_CURRENCY_SYMBOL", "฿")
DISPLAY_QUANTIZE = Decimal(os.getenv("FAIRSHARE_DISPLAY_QUANTIZE", "0.01"))

# Uploads
MAX_QR_SIZE_BYTES = int(os.getenv("FAIRSHARE_MAX_QR_SIZE_BYTES", str(5 * 1024 * 1024)))
