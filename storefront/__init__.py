"""Storefront API.

E-commerce catalog backend: products, categories, brands and image uploads.
"""

__version__ = "0.1.0"
