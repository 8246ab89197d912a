"""
Boolean query params: a raw "false" string must not be treated as truthy.
"""


def ensure_bool_query(value: bool | str | None, default: bool = False) -> bool:
    """
    Query value (bool or str) -> bool.
    "true"/"1"/"yes" (any case) -> True; "false"/"0"/"no"/"" -> False; None -> default.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    s = str(value).strip().lower()
    return s in ("true", "1", "yes")
