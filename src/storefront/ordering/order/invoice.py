"""Printable invoice for an order."""

from storefront.shared.money import format_money


def invoice_payload(order) -> dict:
    return {
        "invoice": {
            "order_number": order.order_number,
            "date": order.created_at.strftime("%Y-%m-%d") if order.created_at else None,
            "bill_to": {
                "name": order.customer_name(),
                "email": order.email,
                "phone": order.phone,
                "address": order.address,
                "city": order.city,
                "state": order.state,
                "zip_code": order.zip_code,
                "country": order.country,
            },
            "lines": [
                {
                    "name": item.name,
                    "sku": item.sku,
                    "quantity": item.quantity,
                    "unit_price": format_money(item.unit_price),
                    "total_price": format_money(item.total_price),
                }
                for item in order.items
            ],
            "subtotal": format_money(order.subtotal),
            "tax": format_money(order.tax_amount),
            "shipping": format_money(order.shipping_cost),
            "total": format_money(order.total_amount),
            "payment_method": order.payment_method,
            "payment_status": order.payment_status,
        }
    }
