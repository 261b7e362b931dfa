# wardrobe/utils/validators.py

import re
from typing import Any, Dict
import logging

from wardrobe.services.product_detail_service import TABS, TAB_DESCRIPTION

logger = logging.getLogger(__name__)

MAX_PRODUCT_ID_LENGTH = 128

class ValidationError(Exception):
    """Custom exception for validation errors"""
    pass

def validate_product_id(value: Any) -> str:
    """
    Validate a product identifier taken from the URL

    Raises:
        ValidationError: If the identifier is empty, too long or contains control characters
    """
    if not isinstance(value, str):
        raise ValidationError("Product ID must be a string")

    product_id = value.strip()
    if not product_id:
        raise ValidationError("Product ID is required")
    if len(product_id) > MAX_PRODUCT_ID_LENGTH:
        raise ValidationError(f"Product ID longer than {MAX_PRODUCT_ID_LENGTH} characters")
    if re.search(r'[\x00-\x1F\x7F]', product_id):
        raise ValidationError("Product ID contains control characters")

    return product_id

def validate_tab(tab: Any) -> str:
    """Known tab name, or the description tab for anything else"""
    if isinstance(tab, str) and tab.strip().lower() in TABS:
        return tab.strip().lower()
    return TAB_DESCRIPTION

def validate_pagination_params(page: Any, per_page: Any, max_per_page: int = 100) -> Dict[str, int]:
    """Validate pagination parameters"""
    try:
        page_int = int(page) if page else 1
        per_page_int = int(per_page) if per_page else 12

        # Ensure positive values
        page_int = max(1, page_int)
        per_page_int = max(1, min(per_page_int, max_per_page))

        return {
            'page': page_int,
            'per_page': per_page_int
        }
    except (ValueError, TypeError):
        return {
            'page': 1,
            'per_page': 12
        }
