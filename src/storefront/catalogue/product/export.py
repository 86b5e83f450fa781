"""CSV export of the product catalogue."""

import csv
import io

from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category

HEADERS = ["Name", "SKU", "Category", "Price", "Inventory", "Active", "Featured", "Created At"]


def products_csv(products) -> str:
    category_names = {str(c.id): c.name for c in current_domain.repository_for(Category).ordered()}

    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(HEADERS)
    for product in products:
        writer.writerow(
            [
                product.name,
                product.sku,
                category_names.get(str(product.category_id), ""),
                f"{product.price:.2f}",
                product.inventory_count,
                str(bool(product.active)).lower(),
                str(bool(product.featured)).lower(),
                product.created_at.strftime("%Y-%m-%d") if product.created_at else "",
            ]
        )
    return buffer.getvalue()
