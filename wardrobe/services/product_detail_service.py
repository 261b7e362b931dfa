# wardrobe/services/product_detail_service.py

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from wardrobe.data.products import Product
from wardrobe.services.catalog_service import CatalogService, CatalogAPIError

logger = logging.getLogger(__name__)

TAB_DESCRIPTION = 'deskripsi'
TAB_REVIEWS = 'ulasan'
TABS = (TAB_DESCRIPTION, TAB_REVIEWS)

STATUS_LOADING = 'loading'
STATUS_NOT_FOUND = 'not_found'
STATUS_LOADED = 'loaded'

SUGGESTION_LIMIT = 4


@dataclass
class ProductDetailState:
    """Everything the detail page renders from, for one (identifier, base URL) pair"""
    product: Optional[Product] = None
    other_products: List[Product] = field(default_factory=list)
    active_tab: str = TAB_DESCRIPTION
    loading: bool = True

    @property
    def status(self) -> str:
        if self.loading:
            return STATUS_LOADING
        if self.product is None:
            return STATUS_NOT_FOUND
        return STATUS_LOADED


def select_other_products(products: List[Product], current_id: str,
                          limit: int = SUGGESTION_LIMIT) -> List[Product]:
    """Drop the product being viewed and keep the first ``limit`` others, in backend order"""
    return [p for p in products if p.id != current_id][:limit]


class ProductDetailLoader:
    """
    Runs the load sequence for the product detail page

    The product is fetched first, then the whole collection for suggestions.
    Every load takes a generation token; a load that has been superseded by a
    newer one never writes into state.
    """

    def __init__(self, client_factory: Callable[[str], CatalogService] = None,
                 suggestion_limit: int = SUGGESTION_LIMIT):
        self._client_factory = client_factory or CatalogService
        self.suggestion_limit = suggestion_limit
        self.state = ProductDetailState()
        self._generation = 0
        self._key: Optional[Tuple[str, str]] = None

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def sync(self, identifier: Optional[str], api_base_url: Optional[str]) -> ProductDetailState:
        """Reload from scratch when the identifier or the base URL changed since the last call"""
        key = (identifier, api_base_url)
        if key != self._key:
            self._key = key
            # Fresh state; anything still in flight for the old pair is now stale
            self._generation += 1
            self.state = ProductDetailState()
            self.load(identifier, api_base_url)
        return self.state

    def load(self, identifier: Optional[str], api_base_url: Optional[str]) -> ProductDetailState:
        """
        Fetch the product and its suggestions into state

        Missing identifier or base URL is a silent no-op. Every other call
        starts from a fresh state. Transport and parse failures are logged and
        end the sequence, keeping whatever this load already stored.
        ``loading`` is always cleared for the current load.
        """
        if not identifier or not api_base_url:
            logger.debug("Skipping product load, identifier or API base URL missing")
            return self.state

        self._generation += 1
        generation = self._generation
        state = self.state = ProductDetailState(loading=True)

        try:
            client = self._client_factory(api_base_url)

            product = client.get_product(identifier)
            if not self._is_current(generation):
                logger.info(f"Discarding stale load for product {identifier}")
                return self.state
            if product is not None:
                state.product = product

            products = client.list_products()
            if not self._is_current(generation):
                logger.info(f"Discarding stale suggestions for product {identifier}")
                return self.state
            if products is not None:
                state.other_products = select_other_products(
                    products, identifier, self.suggestion_limit
                )
        except CatalogAPIError as e:
            logger.error(f"Error fetching data for product {identifier}: {str(e)}")
        except Exception as e:
            logger.error(f"Unexpected error fetching data for product {identifier}: {str(e)}", exc_info=True)
        finally:
            if self._is_current(generation):
                state.loading = False

        return self.state

    def select_tab(self, tab: str) -> ProductDetailState:
        """Switch the visible tab; never touches the network or the loaded data"""
        if tab not in TABS:
            raise ValueError(f"Unknown tab: {tab!r}")
        self.state.active_tab = tab
        return self.state
