# wardrobe/utils/formatting.py

from typing import Optional, Union
from babel.numbers import format_currency

DEFAULT_LOCALE = 'id_ID'
DEFAULT_CURRENCY = 'IDR'
DEFAULT_PLACEHOLDER_IMAGE = '/static/images/placeholder.svg'

def format_price(price: Union[int, float], locale: str = DEFAULT_LOCALE,
                 currency: str = DEFAULT_CURRENCY) -> str:
    """
    Format a whole-unit price as a localized currency string without decimals

    >>> format_price(150000)
    'Rp150.000'
    """
    # currency_digits=False so the pattern, not CLDR, decides the fraction digits
    return format_currency(
        price,
        currency,
        format='¤#,##0',
        locale=locale,
        currency_digits=False,
    )

def resolve_image_url(image_url: Optional[str],
                      placeholder: str = DEFAULT_PLACEHOLDER_IMAGE) -> str:
    """Return the product image, or the placeholder when it is missing or empty"""
    if isinstance(image_url, str) and image_url:
        return image_url
    return placeholder
