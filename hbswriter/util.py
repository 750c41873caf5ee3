from pathlib import PurePosixPath
from typing import Iterable

utf8_bom = b"\xef\xbb\xbf"

def strip_utf8_bom(data: bytes) -> bytes:
    # removes the utf-8 byte order mark from byte data if present.
    if data.startswith(utf8_bom):
        return data[len(utf8_bom):]
    return data

def strip_extension(relative_path: str, extensions: Iterable[str]) -> str:
    # drops the first matching trailing extension; other names pass through unchanged.
    for ext in extensions:
        if relative_path.endswith(ext):
            return relative_path[: -len(ext)]
    return relative_path

def registry_name(relative_path: str, extensions: Iterable[str], preserve_leading_separator: bool = False) -> str:
    """
    Derives a partial/helper name from a path relative to its configured directory.

    `forms/input.hbs` becomes `forms/input`, or `/forms/input` when the
    leading separator is preserved.
    """
    name = strip_extension(PurePosixPath(relative_path).as_posix(), extensions).lstrip("/")
    return f"/{name}" if preserve_leading_separator else name
