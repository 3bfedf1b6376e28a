from __future__ import annotations

import json
import os
import tempfile
from contextlib import suppress
from typing import Any


def atomic_write_json(
    path: str | os.PathLike[str],
    obj: Any,
    *,
    ensure_ascii: bool = False,
    indent: int | None = 2,
    encoding: str = "utf-8",
) -> None:
    """Write JSON to ``path`` via a temp file and ``os.replace``.

    A failure while serialising leaves any existing file untouched.
    """
    target = os.fspath(path)
    directory = os.path.dirname(target) or "."
    os.makedirs(directory, exist_ok=True)

    basename = os.path.basename(target)
    fd, tmp_path = tempfile.mkstemp(
        dir=directory,
        prefix=f".{basename}.",
        suffix=".tmp",
    )

    try:
        try:
            fp = os.fdopen(fd, "w", encoding=encoding)
        except Exception:
            os.close(fd)
            raise
        with fp:
            json.dump(obj, fp, ensure_ascii=ensure_ascii, indent=indent)
            fp.write("\n")
            fp.flush()
            os.fsync(fp.fileno())
        os.replace(tmp_path, target)
        tmp_path = ""
    finally:
        if tmp_path:
            with suppress(FileNotFoundError):
                os.remove(tmp_path)


__all__ = ["atomic_write_json"]
