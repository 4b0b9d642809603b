"""Rendering of cage combinations as text lines or JSON."""

import json


class OutputLimitExceeded(ValueError):
    """Rendered output would not fit in the configured byte budget."""

    def __init__(self, limit, size):
        super().__init__(f"output of at least {size} bytes exceeds the limit of {limit} bytes")
        self.limit = limit
        self.size = size


def format_combination(combo):
    return " ".join(str(d) for d in combo)


def serialize(combinations, max_bytes=None):
    """One line per combination, digits separated by spaces.

    ``max_bytes`` bounds the size of the result; exceeding it raises
    OutputLimitExceeded instead of cutting the text short.
    """
    lines = []
    size = 0
    for combo in combinations:
        line = format_combination(combo) + "\n"
        size += len(line.encode("utf8"))
        if max_bytes is not None and size > max_bytes:
            raise OutputLimitExceeded(max_bytes, size)
        lines.append(line)
    return "".join(lines)


def serialize_json(combinations, max_bytes=None):
    combos = [list(combo) for combo in combinations]
    text = json.dumps(combos) + "\n"
    size = len(text.encode("utf8"))
    if max_bytes is not None and size > max_bytes:
        raise OutputLimitExceeded(max_bytes, size)
    return text
