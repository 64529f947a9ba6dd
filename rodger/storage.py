# rodger/storage.py
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable

logger = logging.getLogger(__name__)


def load_json(path: str | Path, default: Callable[[], Any]) -> Any:
    """Read a JSON document, returning ``default()`` when it is unusable.

    A missing file is the normal first-run case. Unreadable or corrupt
    files are logged and treated as empty rather than aborting startup.
    """
    target = Path(path)
    if not target.exists():
        return default()
    try:
        with target.open("r", encoding="utf-8") as fp:
            return json.load(fp)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable store %s: %s", target, exc)
        return default()


def save_json(path: str | Path, data: Any) -> None:
    """Write ``data`` to ``path`` via a temp file and an atomic rename."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fp:
            json.dump(data, fp, ensure_ascii=False, indent=2)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("Saved %s", target)
