"""Field type registry and form introspection cache.

A ``Registry`` maps field classes to zero-argument constructors and caches
the field descriptors computed for each form class. Both maps are shared
by every request, written rarely (at import time and on the first use of a
form class) and read constantly, so they sit behind a reader-writer lock.

Usage:
    from formbind import register

    class SlugField(StringField):
        ...

    register(SlugField, lambda: SlugField(max_len=64))
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from formbind.fields import Field, register_builtin_fields
from formbind.introspect import Constructor, FieldInfo, build_type_info

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Many concurrent readers or one writer. Waiting writers block new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class Registry:
    """Constructors for field classes plus cached form descriptors."""

    def __init__(self) -> None:
        self._constructors: dict[type[Field], Constructor] = {}
        self._constructors_lock = ReadWriteLock()
        self._type_infos: dict[type, tuple[FieldInfo, ...]] = {}
        self._type_infos_lock = ReadWriteLock()

    def register(self, field_cls: type[Field], constructor: Constructor) -> None:
        """Associate ``field_cls`` with a factory. A later call replaces an earlier one."""
        with self._constructors_lock.write():
            replaced = field_cls in self._constructors
            self._constructors[field_cls] = constructor
        if replaced:
            logger.debug("Replaced constructor for %s", field_cls.__name__)
        else:
            logger.debug("Registered constructor for %s", field_cls.__name__)

    def lookup(self, field_cls: type) -> Constructor | None:
        with self._constructors_lock.read():
            return self._constructors.get(field_cls)

    def __contains__(self, field_cls: object) -> bool:
        with self._constructors_lock.read():
            return field_cls in self._constructors

    def type_info(self, form_cls: type) -> tuple[FieldInfo, ...]:
        """Field descriptors for ``form_cls``, computed at most once per class."""
        with self._type_infos_lock.read():
            infos = self._type_infos.get(form_cls)
        if infos is not None:
            return infos

        with self._type_infos_lock.write():
            # Another thread may have filled the entry while we waited
            infos = self._type_infos.get(form_cls)
            if infos is None:
                infos = build_type_info(form_cls, self.lookup)
                self._type_infos[form_cls] = infos
                logger.debug(
                    "Introspected %s: %s",
                    form_cls.__name__,
                    ", ".join(info.name for info in infos) or "(no fields)",
                )
        return infos

    def clear(self) -> None:
        """Forget all constructors and cached descriptors."""
        with self._constructors_lock.write():
            self._constructors.clear()
        with self._type_infos_lock.write():
            self._type_infos.clear()


default_registry = Registry()
register_builtin_fields(default_registry)


def register(field_cls: type[Field], constructor: Constructor) -> None:
    """Register a field constructor in the default registry."""
    default_registry.register(field_cls, constructor)
