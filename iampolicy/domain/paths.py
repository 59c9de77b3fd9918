"""JSON path rendering used in error details and structural diffs."""

import json


def child_path(path: str, part: int | str) -> str:
    """
    Extend a JSON path by one array index or object key.

    Example:
        >>> child_path(child_path("$", "Statement"), 0)
        '$.Statement[0]'
        >>> child_path("$.Condition", "aws:SourceIp")
        '$.Condition["aws:SourceIp"]'
    """
    if isinstance(part, int):
        return f"{path}[{part}]"
    if part.isidentifier():
        return f"{path}.{part}"
    return f"{path}[{json.dumps(part, ensure_ascii=False)}]"
