"""Business rules for a multi-vendor marketplace: commissions, orders, products, vendors and a JSON catalogue."""

__version__ = "0.1.0"

__all__ = [
    "cache",
    "commission",
    "jsonloader",
    "jsonrepo",
    "models",
    "orders",
    "pagination",
    "passwords",
    "products",
    "responses",
    "vendors",
]