import re
from typing import Optional
from urllib.parse import quote


def join_file_path(path: str, name: str) -> str:
    """Path of a file inside its project, without a leading slash.

    Generated files store the directory in ``path``; files saved from the
    editor may store the complete path. Both resolve to the same entry.
    """
    path = (path or "").strip().strip("/")
    if not path:
        return name
    if path == name or path.endswith("/" + name):
        return path
    return f"{path}/{name}"


def archive_path(full_path: str) -> Optional[str]:
    """Normalized archive entry name, or None when it would leave the archive root."""
    parts = [p for p in (full_path or "").replace("\\", "/").split("/") if p not in ("", ".")]
    if not parts or ".." in parts:
        return None
    return "/".join(parts)


def attachment_header(filename: str) -> str:
    """Content-Disposition value with an ASCII fallback and the RFC 5987 UTF-8 name."""
    stem, _, ext = filename.rpartition(".")
    fallback = re.sub(r"[^A-Za-z0-9.-]+", "_", stem).strip("_") or "download"
    return f"attachment; filename=\"{fallback}.{ext}\"; filename*=UTF-8''{quote(filename, safe='')}"
