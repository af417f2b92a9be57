"""Basic Corral usage example.

Demonstrates:
- Model configuration
- Type-level and record-level subscriptions
- Validation failures reported through the error event
- Projections: edits stay local until saved
"""

from corral import UnknownRecordError
from corral.logging_utils import configure_logging

from examples.models import Product


def main() -> None:
    configure_logging()

    Product.change(lambda record, tag, options: print(f"  [change] {tag}: {record!r}"))
    Product.bind("error", lambda record, message: print(f"  [error] {message}"))

    print("Creating products...")
    pen = Product.create({"name": "Pen", "price": 1})
    Product.create({"name": "Notebook", "price": 4})
    Product.create({"price": 2})  # rejected

    pen.bind("update", lambda record, options: print(f"  [pen updated] {record.price}"))

    print("\nEditing a projection without saving...")
    draft = Product.find(pen.id)
    draft.price = 100
    print(f"  stored price is still {Product.find(pen.id).price}")

    print("\nSaving...")
    draft.save()

    print("\nCheap products:")
    for product in Product.select(lambda record: record.price < 5):
        print(f"  {product.label()}")

    print("\nDestroying the pen...")
    Product.destroy(pen.id)
    try:
        Product.find(pen.id)
    except UnknownRecordError as exc:
        print(f"  {exc}")

    print(f"\nSnapshot: {Product.to_json()}")


if __name__ == "__main__":
    main()
