# wardrobe/services/catalog_service.py

import requests
import logging
from typing import Optional, Dict, Any, List
from urllib.parse import quote

from wardrobe.data.products import Product

logger = logging.getLogger(__name__)

class CatalogAPIError(Exception):
    """Raised when the catalog backend cannot be reached or returns a malformed payload"""
    def __init__(self, message: str, status_code: int = None, response_data: Dict = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data

class CatalogService:
    """HTTP JSON client for the catalog backend (``/products`` and ``/products/{id}``)"""

    def __init__(self, base_url: str, timeout: float = 10):
        if not base_url:
            raise CatalogAPIError("Catalog API base URL is required")
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def _get(self, path: str) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug(f"Catalog GET {url}")
        try:
            return requests.get(
                url,
                headers={'Accept': 'application/json'},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error calling catalog API {url}: {str(e)}")
            raise CatalogAPIError(f"Network error: {str(e)}")

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise CatalogAPIError(
                f"Malformed JSON from catalog API: {str(e)}",
                status_code=response.status_code
            )

    def get_product(self, product_id: str) -> Optional[Product]:
        """
        Fetch a single product

        Args:
            product_id: Backend identifier of the product

        Returns:
            The product, or None when the backend answers with a non-2xx status

        Raises:
            CatalogAPIError: On transport failure or a malformed payload
        """
        response = self._get(f"/products/{quote(str(product_id), safe='')}")

        if not response.ok:
            logger.info(f"Product {product_id} not available, status: {response.status_code}")
            return None

        data = self._decode(response)
        try:
            return Product.from_api(data)
        except ValueError as e:
            raise CatalogAPIError(
                f"Malformed product payload: {str(e)}",
                status_code=response.status_code,
                response_data=data if isinstance(data, dict) else None
            )

    def list_products(self) -> Optional[List[Product]]:
        """
        Fetch the whole product collection in backend order

        Returns:
            List of products, or None when the backend answers with a non-2xx status

        Raises:
            CatalogAPIError: On transport failure or a malformed payload
        """
        response = self._get('/products')

        if not response.ok:
            logger.warning(f"Product collection not available, status: {response.status_code}")
            return None

        data = self._decode(response)
        if not isinstance(data, list):
            raise CatalogAPIError(
                f"Expected a JSON array of products, got {type(data).__name__}",
                status_code=response.status_code
            )

        products = []
        for entry in data:
            try:
                products.append(Product.from_api(entry))
            except ValueError as e:
                # One bad record should not hide the rest of the catalog
                logger.warning(f"Skipping malformed product in collection: {str(e)}")
        return products
