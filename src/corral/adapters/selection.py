"""Selection and form helpers used at the view boundary."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from corral.adapters.protocol import FieldPair, FormSerializer, Selector


def passthrough_selector(element: Any) -> Any:
    """Selector used when no view toolkit is installed: returns element unchanged."""
    return element


def resolve_selector(selector: Selector | None = None) -> Selector:
    """Return selector, or the passthrough selector when none is available."""
    if selector is None:
        return passthrough_selector
    return selector


def form_pairs(form: FormSerializer | Iterable[FieldPair]) -> dict[str, Any]:
    """Collapse serialized form fields into an attribute mapping.

    Later fields with the same name win, matching how a form submission is
    read back into a record.

    Args:
        form: FormSerializer, or an iterable of name/value pairs.

    Returns:
        Mapping of field name -> value.
    """
    pairs = form.serialize_array() if isinstance(form, FormSerializer) else form
    return {pair["name"]: pair["value"] for pair in pairs}
