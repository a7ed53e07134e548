from .expiry_label import ExpiryLabel

__all__ = ["ExpiryLabel"]
