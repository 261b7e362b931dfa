from flask import render_template, request, current_app
from flask_paginate import Pagination, get_page_parameter
import logging
from functools import wraps
from typing import List, Optional

from . import product
from wardrobe import cache
from wardrobe.data.products import Product
from wardrobe.services.catalog_service import CatalogService, CatalogAPIError
from wardrobe.services.product_detail_service import (
    ProductDetailLoader, STATUS_LOADING, STATUS_NOT_FOUND
)
from wardrobe.utils.validators import (
    validate_product_id, validate_tab, validate_pagination_params, ValidationError
)

logger = logging.getLogger(__name__)

CATALOG_CACHE_TIMEOUT = 300  # 5 minutes

def handle_errors(f):
    """Decorator for consistent error handling"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ValidationError as e:
            logger.warning(f"Validation error in {f.__name__}: {str(e)} from {request.remote_addr}")
            return render_template('product/not_found.html'), 404
        except Exception as e:
            logger.error(f"Unexpected error in {f.__name__}: {str(e)}", exc_info=True)
            return render_template('Error_Pages/500.html'), 500
    return decorated_function

def _catalog_client(api_base_url: str) -> CatalogService:
    return CatalogService(api_base_url, timeout=current_app.config['CATALOG_API_TIMEOUT'])

@cache.memoize(timeout=CATALOG_CACHE_TIMEOUT)
def _fetch_catalog(api_base_url: str) -> Optional[List[Product]]:
    """Whole collection for the catalog page; None (never cached) when the backend is unavailable"""
    try:
        return _catalog_client(api_base_url).list_products()
    except CatalogAPIError as e:
        logger.error(f"Error fetching catalog: {str(e)}")
        return None

@product.route('/produk/<product_id>')
@handle_errors
def product_detail(product_id):
    """Product detail page: product, tabs and suggestions"""
    product_id = validate_product_id(product_id)

    loader = ProductDetailLoader(
        client_factory=_catalog_client,
        suggestion_limit=current_app.config['SUGGESTION_LIMIT']
    )
    state = loader.sync(product_id, current_app.config.get('CATALOG_API_BASE_URL'))
    loader.select_tab(validate_tab(request.args.get('tab')))

    if state.status == STATUS_LOADING:
        return render_template('product/loading.html')

    if state.status == STATUS_NOT_FOUND:
        logger.info(f"Product not found: {product_id}")
        return render_template('product/not_found.html'), 404

    logger.info(f"Displaying product {product_id} with {len(state.other_products)} suggestions")
    return render_template(
        'product/product_detail.html',
        product=state.product,
        other_products=state.other_products,
        active_tab=state.active_tab
    )

@product.route('/browse')
@handle_errors
def browse():
    """Catalog page listing every product"""
    page = request.args.get(get_page_parameter(), type=int, default=1)
    per_page = request.args.get('per_page', current_app.config['CATALOG_PER_PAGE'], type=int)

    pagination_params = validate_pagination_params(page, per_page, max_per_page=48)
    page = pagination_params['page']
    per_page = pagination_params['per_page']

    api_base_url = current_app.config.get('CATALOG_API_BASE_URL')
    products = _fetch_catalog(api_base_url) if api_base_url else None
    unavailable = products is None
    products = products or []

    start = (page - 1) * per_page
    pagination = Pagination(
        page=page,
        per_page=per_page,
        total=len(products),
        record_name='kostum',
        css_framework='bootstrap5'
    )

    logger.info(f"Displaying catalog page {page}, {len(products[start:start + per_page])} products")

    return render_template(
        'browse/browse.html',
        products=products[start:start + per_page],
        pagination=pagination,
        unavailable=unavailable
    )
