from . import auth, flyers, products

__all__ = ["auth", "flyers", "products"]
