"""Transactional changes to key-value property files."""

from __future__ import annotations

from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from configurator.domain.errors import ActionError

from .base import backend_errors, frozen_mapping

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from configurator.domain.ports import PropertyStore

log = getLogger(__name__)


class PropertyFileMode(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class PropertyFileAction:
    """Creates, updates or deletes one property file.

    The file's existence and contents are captured at construction. Rolling back
    rewrites those contents, or removes the file if it did not exist before.
    """

    def __init__(
        self,
        path: Path,
        *,
        mode: PropertyFileMode,
        store: PropertyStore,
        properties: Mapping[str, str] | None = None,
        keep_ignored: bool = False,
    ) -> None:
        self.path = path
        self.mode = mode
        self._store = store
        with backend_errors(f"Unable to read property file {path}"):
            self.initially_existed = store.exists(path)
        self.initial_properties = frozen_mapping(self.read_state())

        requested = frozen_mapping(properties)
        if mode is PropertyFileMode.UPDATE and keep_ignored:
            self.properties = frozen_mapping({**self.initial_properties, **requested})
        else:
            self.properties = requested

    @classmethod
    def for_create(
        cls, path: Path, properties: Mapping[str, str], store: PropertyStore
    ) -> PropertyFileAction:
        return cls(path, mode=PropertyFileMode.CREATE, store=store, properties=properties)

    @classmethod
    def for_update(
        cls,
        path: Path,
        properties: Mapping[str, str],
        store: PropertyStore,
        *,
        keep_ignored: bool,
    ) -> PropertyFileAction:
        return cls(
            path,
            mode=PropertyFileMode.UPDATE,
            store=store,
            properties=properties,
            keep_ignored=keep_ignored,
        )

    @classmethod
    def for_delete(cls, path: Path, store: PropertyStore) -> PropertyFileAction:
        return cls(path, mode=PropertyFileMode.DELETE, store=store)

    def commit(self) -> None:
        if self.mode is PropertyFileMode.DELETE:
            if self.initially_existed:
                with backend_errors(f"Error deleting property file {self.path}"):
                    self._store.delete(self.path)
            return

        if self.initially_existed and self.initial_properties == self.properties:
            return
        if self.mode is PropertyFileMode.CREATE and self.initially_existed:
            raise ActionError(f"Property file {self.path} already exists")
        with backend_errors(f"Error writing property file {self.path}"):
            self._store.write(self.path, self.properties)

    def rollback(self) -> None:
        with backend_errors(f"Unable to read property file {self.path}"):
            exists = self._store.exists(self.path)

        if not self.initially_existed:
            if exists:
                log.debug("Removing property file %s created by this transaction", self.path)
                with backend_errors(f"Error deleting property file {self.path}"):
                    self._store.delete(self.path)
            return

        if exists and self.read_state() == self.initial_properties:
            return
        with backend_errors(f"Error restoring property file {self.path}"):
            self._store.write(self.path, self.initial_properties)

    def read_state(self) -> dict[str, str]:
        with backend_errors(f"Unable to read property file {self.path}"):
            return self._store.read(self.path)
