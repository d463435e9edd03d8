MODE_ITEMIZED = 'itemized'
MODE_FLAT = 'flat'
MODES = (MODE_ITEMIZED, MODE_FLAT)

# One fixed storage key per variant
STORAGE_KEYS = {
    MODE_ITEMIZED: 'billSplitterData',
    MODE_FLAT: 'discountData',
}

# Platform themes are cosmetic: (gradient top, gradient bottom, accent)
DEFAULT_PLATFORM = 'default'
PLATFORM_THEMES = {
    'default': ((219, 234, 254), (221, 214, 254), (109, 40, 217)),
    'grab': ((220, 252, 231), (187, 247, 208), (0, 177, 79)),
    'lineman': ((220, 252, 231), (209, 250, 229), (6, 199, 85)),
    'foodpanda': ((252, 231, 243), (251, 207, 232), (215, 15, 100)),
    'shopeefood': ((255, 237, 213), (254, 215, 170), (238, 77, 45)),
    'robinhood': ((237, 233, 254), (221, 214, 254), (124, 58, 237)),
}

ALLOWED_IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.gif', '.webp', '.bmp'}
