"""Price and currency derivation for product offers."""
from decimal import Decimal
from typing import Optional

from app.models.catalog import ProductDetailsModel
from app.utils.formatting import Number, format_decimal, to_decimal


def resolve_price(call_for_price: bool, price_value: Number) -> Optional[str]:
    """
    Displayable offer price.
    
    Returns None for call-for-price products, otherwise the price with two
    fractional digits ("9.50").
    """
    if call_for_price:
        return None
    return format_decimal(price_value, 2)


def effective_price(product: ProductDetailsModel) -> Decimal:
    """
    Price a grouped product is offered from.
    
    The cheapest associated product when there are any, else the product's
    own price.
    """
    if product.associated_products:
        return min(
            to_decimal(associated.product_price.price_value)
            for associated in product.associated_products
        )
    return to_decimal(product.product_price.price_value)
