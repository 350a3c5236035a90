# storefront/catalog.py
from typing import List, Sequence

from .models import Product

ALL = "All"
FEATURED_COUNT = 4

def categories(products: Sequence[Product]) -> List[str]:
    out = [ALL]
    for p in products:
        if p.category not in out:
            out.append(p.category)
    return out

def filter_products(products: Sequence[Product], category: str = ALL) -> List[Product]:
    if category == ALL:
        return list(products)
    return [p for p in products if p.category == category]

def featured(products: Sequence[Product], count: int = FEATURED_COUNT) -> List[Product]:
    return list(products[:count])

def format_price(price: float) -> str:
    if float(price).is_integer():
        return f"Rs. {int(price):,}"
    return f"Rs. {price:,.2f}"
