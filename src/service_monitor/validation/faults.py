"""Detection of SOAP fault and error indicators."""

from __future__ import annotations

from typing import Any

FAULT_KEY = "fault"
ERROR_KEY = "error"


def _is_set(value: Any) -> bool:
    if value is None or value is False or value == "":
        return False
    return not (isinstance(value, (int, float)) and value == 0)


def find_fault(body: Any) -> str | None:
    """Return the top-level fault/error key of a response body, if any.

    A ``Fault`` key counts by its presence alone (an empty ``<soap:Fault/>``
    decodes to None); an ``error`` key only when its value is set.
    """
    if not isinstance(body, dict):
        return None
    for key, value in body.items():
        if not isinstance(key, str):
            continue
        name = key.lower()
        if name == FAULT_KEY or (name == ERROR_KEY and _is_set(value)):
            return key
    return None
