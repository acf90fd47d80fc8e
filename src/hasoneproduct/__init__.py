"""hasoneproduct — "customer has one of these products" discount requirement rule."""

__version__ = "0.1.0"
