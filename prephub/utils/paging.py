DEFAULT_LIMIT = 50
DEFAULT_OFFSET = 0

# SQLite INTEGER 上限，超過會在 bind 時 OverflowError
MAX_SQL_INT = 2**63 - 1


def to_int(v, default: int) -> int:
    """Lenient int coercion for query strings: "20" -> 20, "abc"/None/-1/overflow -> default."""
    if v is None:
        return default
    try:
        n = int(str(v).strip())
    except (TypeError, ValueError):
        return default
    if n < 0 or n > MAX_SQL_INT:
        return default
    return n


def parse_limit_offset(limit, offset) -> tuple[int, int]:
    return to_int(limit, DEFAULT_LIMIT), to_int(offset, DEFAULT_OFFSET)
