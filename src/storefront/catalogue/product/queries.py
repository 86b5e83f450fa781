"""Product listings for the storefront and the back-office.

Filtering and ordering run over the repository's results in Python, so the
same listing code works for every database provider.
"""

from protean.utils.globals import current_domain

from storefront.catalogue.product.product import LOW_STOCK_THRESHOLD, Product
from storefront.shared.pagination import Page, paginate

STOREFRONT_PER_PAGE = 12
ADMIN_PER_PAGE = 25
RELATED_LIMIT = 4

PRICE_RANGES = {
    "under_10": lambda price: price < 10,
    "10_25": lambda price: 10 <= price <= 25,
    "25_50": lambda price: 25 <= price <= 50,
    "over_50": lambda price: price > 50,
}

AVAILABILITY = {
    "in_stock": lambda product: (product.inventory_count or 0) > 0,
    "out_of_stock": lambda product: (product.inventory_count or 0) == 0,
}


def _created(product):
    return product.created_at.timestamp() if product.created_at else 0


def matches_search(product, query: str) -> bool:
    needle = query.strip().lower()
    return needle in (product.name or "").lower() or needle in (product.description or "").lower()


def filter_products(products, search=None, category_id=None, price_range=None, availability=None):
    """Narrow ``products`` by the storefront filters; unknown filter values are ignored."""
    if search:
        products = [p for p in products if matches_search(p, search)]
    if category_id:
        products = [p for p in products if str(p.category_id) == str(category_id)]
    if price_range in PRICE_RANGES:
        products = [p for p in products if PRICE_RANGES[price_range](p.price)]
    if availability in AVAILABILITY:
        products = [p for p in products if AVAILABILITY[availability](p)]
    return list(products)


def sort_products(products, sort=None, searching=False):
    products = list(products)
    if sort == "name_asc":
        return sorted(products, key=lambda p: p.name.lower())
    if sort == "name_desc":
        return sorted(products, key=lambda p: p.name.lower(), reverse=True)
    if sort == "price_asc":
        return sorted(products, key=lambda p: p.price)
    if sort == "price_desc":
        return sorted(products, key=lambda p: p.price, reverse=True)
    if sort == "oldest":
        return sorted(products, key=_created)
    if sort == "featured":
        return sorted(products, key=lambda p: (bool(p.featured), _created(p)), reverse=True)
    if sort == "relevance" and searching:
        return products
    return sorted(products, key=_created, reverse=True)


def storefront_listing(
    search=None,
    category_id=None,
    price_range=None,
    availability=None,
    sort=None,
    page=1,
) -> Page:
    products = current_domain.repository_for(Product).active()
    products = filter_products(products, search, category_id, price_range, availability)
    products = sort_products(products, sort, searching=bool(search))
    return paginate(products, page, STOREFRONT_PER_PAGE)


def related_products(product, limit=RELATED_LIMIT):
    siblings = current_domain.repository_for(Product).in_category(product.category_id, active_only=True)
    return [p for p in siblings if p.id != product.id][:limit]


def admin_products(search=None, category_id=None, active=None, low_stock=False, sort=None):
    products = current_domain.repository_for(Product).everything()
    products = filter_products(products, search=search, category_id=category_id)
    if active is not None:
        products = [p for p in products if bool(p.active) == active]
    if low_stock:
        products = [p for p in products if (p.inventory_count or 0) <= LOW_STOCK_THRESHOLD]

    if sort == "name":
        return sorted(products, key=lambda p: p.name.lower())
    if sort == "price":
        return sorted(products, key=lambda p: p.price)
    return sorted(products, key=_created, reverse=True)


def admin_listing(page=1, **filters) -> Page:
    return paginate(admin_products(**filters), page, ADMIN_PER_PAGE)
