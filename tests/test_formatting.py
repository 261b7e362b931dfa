"""
Price and image helpers
"""

import pytest

from wardrobe.utils.formatting import format_price, resolve_image_url, DEFAULT_PLACEHOLDER_IMAGE


@pytest.mark.parametrize('price,expected', [
    (150000, 'Rp150.000'),
    (0, 'Rp0'),
    (1250000, 'Rp1.250.000'),
    (99999.6, 'Rp100.000'),
])
def test_format_price_indonesian_rupiah(price, expected):
    assert format_price(price) == expected


def test_format_price_other_locale():
    assert format_price(1500, locale='en_US', currency='USD') == '$1,500'


@pytest.mark.parametrize('image_url', [None, '', 123])
def test_missing_image_falls_back_to_placeholder(image_url):
    assert resolve_image_url(image_url) == DEFAULT_PLACEHOLDER_IMAGE


def test_whitespace_image_url_is_kept():
    assert resolve_image_url(' ', '/x.png') == ' '


def test_image_url_kept_when_present():
    assert resolve_image_url('https://cdn.test/raiden.jpg', '/x.png') == 'https://cdn.test/raiden.jpg'
