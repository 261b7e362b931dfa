"""
Shared fixtures: Flask app/client and a fake catalog backend behind requests.get
"""

import json
import pytest
import requests
from unittest.mock import patch
from urllib.parse import unquote

from wardrobe import create_app

API_BASE_URL = 'http://catalog.test/api'

CATALOG = [
    {
        '_id': 'kst001',
        'name': 'Kostum Raiden Shogun',
        'series': 'Genshin Impact',
        'price': 350000,
        'rating': 4.9,
        'description': 'Kimono ungu lengkap dengan obi dan aksesoris rambut.',
        'imageUrl': 'https://cdn.test/raiden.jpg'
    },
    {
        '_id': 'xyz999',
        'name': 'Kostum Nezuko Kamado',
        'series': 'Kimetsu no Yaiba',
        'price': 150000,
        'rating': 4.7,
        'description': 'Kimono merah muda bermotif asanoha, termasuk bambu mulut.',
        'imageUrl': ''
    },
    {
        '_id': 'kst003',
        'name': 'Kostum Gojo Satoru',
        'series': 'Jujutsu Kaisen',
        'price': 275000,
        'rating': 4.8,
        'description': 'Seragam Jujutsu High dengan penutup mata.',
        'imageUrl': 'https://cdn.test/gojo.jpg'
    },
    {
        '_id': 'kst004',
        'name': 'Kostum Marin Kitagawa',
        'series': 'Sono Bisque Doll',
        'price': 225000,
        'rating': 4.6,
        'description': 'Seragam sekolah dengan cardigan.',
        'imageUrl': 'https://cdn.test/marin.jpg'
    },
    {
        '_id': 'kst005',
        'name': 'Kostum Anya Forger',
        'series': 'Spy x Family',
        'price': 180000,
        'rating': 4.5,
        'description': 'Seragam Eden Academy ukuran anak.',
        'imageUrl': 'https://cdn.test/anya.jpg'
    },
    {
        '_id': 'kst006',
        'name': 'Kostum Levi Ackerman',
        'series': 'Attack on Titan',
        'price': 320000,
        'rating': 4.9,
        'description': 'Seragam Survey Corps dengan jubah hijau.',
        'imageUrl': 'https://cdn.test/levi.jpg'
    },
]


def make_response(url, status_code=200, payload=None, body=None):
    """Build a real requests.Response carrying a JSON (or raw) body"""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    if body is None:
        body = json.dumps(payload if payload is not None else {})
    response._content = body.encode('utf-8')
    response.headers['Content-Type'] = 'application/json'
    return response


class FakeCatalogBackend:
    """Answers requests.get for /products and /products/<id> from an in-memory list"""

    def __init__(self, products=None, base_url=API_BASE_URL):
        self.products = list(CATALOG if products is None else products)
        self.base_url = base_url
        self.calls = []
        self.list_status = 200
        self.detail_status = None
        self.list_body = None
        self.detail_body = None
        self.raise_on = set()

    def __call__(self, url, headers=None, timeout=None, **kwargs):
        self.calls.append(url)
        path = url[len(self.base_url):]

        if path in self.raise_on:
            raise requests.exceptions.ConnectionError(f"Connection refused: {url}")

        if path == '/products':
            if self.list_body is not None:
                return make_response(url, self.list_status, body=self.list_body)
            return make_response(url, self.list_status, payload=self.products)

        product_id = unquote(path[len('/products/'):])
        if self.detail_body is not None:
            return make_response(url, self.detail_status or 200, body=self.detail_body)
        if self.detail_status is not None:
            return make_response(url, self.detail_status, payload={'message': 'error'})
        for item in self.products:
            if item['_id'] == product_id:
                return make_response(url, 200, payload=item)
        return make_response(url, 404, payload={'message': 'Product not found'})


@pytest.fixture
def backend():
    """Fake catalog backend patched in place of requests.get"""
    fake = FakeCatalogBackend()
    with patch('wardrobe.services.catalog_service.requests.get', side_effect=fake):
        yield fake


@pytest.fixture
def app():
    """Create and configure a test app instance"""
    app = create_app('testing')
    app.config['TESTING'] = True
    app.config['CATALOG_API_BASE_URL'] = API_BASE_URL

    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create a test client"""
    return app.test_client()
