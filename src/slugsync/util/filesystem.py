"""
Writing form snapshots back to disk.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

from filelock import FileLock


def write_form_snapshot(path: Path | str, snapshot: Dict[str, Any]) -> Path:
    """
    Replace the snapshot at ``path`` with ``snapshot`` as indented UTF-8 JSON.

    Concurrent ``slugsync sync --write`` runs on the same form serialize on a
    ``<name>.lock`` file beside it. The JSON goes to a temp file in the same
    directory first, so readers see either the old snapshot or the new one.
    """
    target = Path(path).expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    document = json.dumps(snapshot, indent=2, ensure_ascii=False) + "\n"

    with FileLock(str(target.with_name(f"{target.name}.lock"))):
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=target.parent,
            prefix=f".{target.stem}.",
            suffix=".json.tmp",
            delete=False,
        ) as staged:
            staged.write(document)
        try:
            os.replace(staged.name, target)
        except OSError:
            os.unlink(staged.name)
            raise
    return target
