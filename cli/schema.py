"""CLI wrapper: Write the JSON Schema of the policy document."""

from __future__ import annotations

import json
import sys
from pathlib import Path

from iampolicy.schemas import Policy


def main() -> None:
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("docs/policy.schema.json")
    target.parent.mkdir(parents=True, exist_ok=True)
    schema = Policy.model_json_schema(by_alias=True)
    target.write_text(json.dumps(schema, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    print(f"Wrote {target}")
