"""Property files stored as dotenv-style ``key='value'`` lines."""

from __future__ import annotations

import os
import re
import tempfile
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import dotenv_values, set_key

from configurator.domain.ports.errors import BackendError

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)

_INVALID_KEY = re.compile(r"[\s=#'\"]")


class PropertyStoreError(BackendError):
    """Raised when a property file cannot be read or written."""


class DotenvPropertyStore:
    """``PropertyStore`` backed by python-dotenv files.

    Relative paths resolve against ``base_dir``. Writes go to a temporary file in
    the target directory that then replaces the target, so readers never see a
    half-written file.
    """

    def __init__(self, base_dir: Path | None = None, *, encoding: str = "utf-8") -> None:
        self._base_dir = base_dir
        self._encoding = encoding

    def resolve(self, path: Path) -> Path:
        path = Path(path).expanduser()
        if path.is_absolute() or self._base_dir is None:
            return path
        return self._base_dir / path

    def exists(self, path: Path) -> bool:
        return self.resolve(path).is_file()

    def read(self, path: Path) -> dict[str, str]:
        resolved = self.resolve(path)
        if not resolved.is_file():
            return {}
        try:
            values = dotenv_values(resolved, interpolate=False, encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise PropertyStoreError(f"Unable to read {resolved}: {exc}") from exc
        return {key: value if value is not None else "" for key, value in values.items()}

    def write(self, path: Path, properties: Mapping[str, str]) -> None:
        resolved = self.resolve(path)
        for key in properties:
            if not key or _INVALID_KEY.search(key):
                raise PropertyStoreError(f"Invalid property key {key!r} for {resolved}")

        try:
            resolved.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                dir=resolved.parent, prefix=f".{resolved.name}.", suffix=".tmp"
            )
            os.close(fd)
        except OSError as exc:
            raise PropertyStoreError(f"Unable to write {resolved}: {exc}") from exc

        try:
            for key, value in properties.items():
                set_key(temp_name, key, str(value), quote_mode="always", encoding=self._encoding)
            Path(temp_name).replace(resolved)
        except OSError as exc:
            Path(temp_name).unlink(missing_ok=True)
            raise PropertyStoreError(f"Unable to write {resolved}: {exc}") from exc
        log.debug("Wrote %d properties to %s", len(properties), resolved)

    def delete(self, path: Path) -> None:
        resolved = self.resolve(path)
        try:
            resolved.unlink()
        except FileNotFoundError as exc:
            raise PropertyStoreError(f"Property file {resolved} does not exist") from exc
        except OSError as exc:
            raise PropertyStoreError(f"Unable to delete {resolved}: {exc}") from exc
