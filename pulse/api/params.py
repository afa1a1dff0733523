"""Permissive query-parameter coercion: bad pagination input falls back to defaults."""


def positive_int(value: str | int | None, default: int, maximum: int | None = None) -> int:
    """Parse ``value`` as an integer >= 1, else ``default``; clamp to ``maximum`` when given."""
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if number < 1:
        return default
    if maximum is not None:
        return min(number, maximum)
    return number


def optional_bool(value: str | None) -> bool | None:
    """``"true"``/``"false"`` (any case) or ``None`` for anything else."""
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None
