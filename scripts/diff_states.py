#!/usr/bin/env python3
"""Compare two JSON state files and show which state paths changed.

Prints the listener names a ShapeX container would re-dispatch if the
first state were replaced by the second.

Usage
-----
    python scripts/diff_states.py old.json new.json
    python scripts/diff_states.py --prefix '#' old.json new.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from shapex import ChangeKind, diff_changes  # noqa: E402

MAX_VAL_WIDTH = 60
MISSING = "<missing>"


def _truncate(val: Any, width: int = MAX_VAL_WIDTH) -> str:
    s = json.dumps(val, ensure_ascii=False)
    if len(s) <= width:
        return s
    return s[: width - 3] + "..."


def main() -> None:
    parser = argparse.ArgumentParser(description="Diff two JSON state files.")
    parser.add_argument("old", help="Older state file")
    parser.add_argument("new", help="Newer state file")
    parser.add_argument("--prefix", default="$", help="State listener sentinel (default: $)")
    parser.add_argument("--separator", default=".", help="Path separator (default: .)")
    args = parser.parse_args()

    file_old, file_new = Path(args.old), Path(args.new)

    print(f"Old: {file_old.name}")
    print(f"New: {file_new.name}")
    print()

    old = json.loads(file_old.read_text(encoding="utf-8"))
    new = json.loads(file_new.read_text(encoding="utf-8"))

    changes = diff_changes(old, new, prefix=args.prefix, separator=args.separator)

    if not changes:
        print("No differences found.")
        return

    rows = [
        (
            change.path,
            change.kind.value,
            _truncate(change.old),
            MISSING if change.kind is ChangeKind.DELETED else _truncate(change.new),
        )
        for change in changes
    ]

    path_w = max(4, *(len(r[0]) for r in rows))
    kind_w = max(4, *(len(r[1]) for r in rows))
    old_w = max(3, *(len(r[2]) for r in rows))

    header = f"{'Path':<{path_w}}  {'Kind':<{kind_w}}  {'Old':<{old_w}}  New"
    print(header)
    print("─" * len(header))

    for path, kind, old_val, new_val in rows:
        print(f"{path:<{path_w}}  {kind:<{kind_w}}  {old_val:<{old_w}}  {new_val}")

    print(f"\n{len(changes)} change(s) found.")


if __name__ == "__main__":
    main()
