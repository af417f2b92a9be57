"""Example model implementations demonstrating Corral features."""

from corral import Model


class Product(Model):
    """Example: model with validation and a computed accessor."""

    def validate(self):
        if not getattr(self, "name", None):
            return "name is required"
        if getattr(self, "price", 0) < 0:
            return "price must not be negative"
        return None

    def label(self, value=None):
        return f"{self.name} ({self.price})"


Product.configure("Product", "name", "price", "label")


class Tag(Model):
    """Example: plain model, no validation."""


Tag.configure("Tag", "name")
