"""JSON shape of an order."""


def order_item_data(item) -> dict:
    return {
        "id": str(item.id),
        "product_id": str(item.product_id),
        "variant_id": str(item.variant_id) if item.variant_id else None,
        "name": item.name,
        "sku": item.sku,
        "quantity": item.quantity,
        "unit_price": item.unit_price,
        "total_price": item.total_price,
        "formatted_unit_price": item.formatted_unit_price(),
        "formatted_total_price": item.formatted_total_price(),
    }


def order_data(order) -> dict:
    return {
        "id": str(order.id),
        "order_number": order.order_number,
        "user_id": str(order.user_id) if order.user_id else None,
        "status": order.status,
        "status_color": order.status_color(),
        "payment_status": order.payment_status,
        "payment_status_color": order.payment_status_color(),
        "customer_name": order.customer_name(),
        "email": order.email,
        "phone": order.phone,
        "address": order.address,
        "city": order.city,
        "state": order.state,
        "zip_code": order.zip_code,
        "country": order.country,
        "notes": order.notes,
        "shipping_method": order.shipping_method,
        "payment_method": order.payment_method,
        "tracking_number": order.tracking_number,
        "subtotal": order.subtotal,
        "tax_amount": order.tax_amount,
        "shipping_cost": order.shipping_cost,
        "total_amount": order.total_amount,
        **order.formatted_totals(),
        "items_count": order.items_count(),
        "can_be_cancelled": order.can_be_cancelled(),
        "can_be_refunded": order.can_be_refunded(),
        "items": [order_item_data(item) for item in order.items],
        "created_at": order.created_at.isoformat() if order.created_at else None,
    }
