# modelstate/persistence/memory.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
A small in-memory record store.

It implements just enough of an "active record" host for the persistence
layer: identity (``new_record``), ``save``/``reload``, equality queries via
``where``, presence validation and a single pre-create hook point. Useful for
tests and prototypes; it is not a database.
"""

from __future__ import annotations

import copy
import itertools
import logging
import threading
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple

from modelstate.core.errors import FSMError
from modelstate.interfaces.types import PreCreateHook
from modelstate.persistence.adapter import read_field
from modelstate.persistence.record import RecordPersistence
from modelstate.runtime.registry import registry
from modelstate.stateful import Stateful

logger = logging.getLogger(__name__)


class RecordNotFound(FSMError):
    """
    Raised when a record id is not present in the store.
    """


class RecordInvalid(FSMError):
    """
    Raised by ``save_or_raise`` when validation or a pre-create hook fails.
    """

    def __init__(self, record: "Record") -> None:
        self.record = record
        super().__init__(f"Validation failed: {', '.join(record.errors)}")


class MemoryStore:
    """
    Tables of attribute dictionaries keyed by integer id. Rows are copied on
    the way in and out, so a record only sees stored changes after reload().
    """

    def __init__(self) -> None:
        self._tables: Dict[str, Dict[int, Dict[str, Any]]] = {}
        self._sequences: Dict[str, Iterator[int]] = {}
        self._lock = threading.Lock()

    def insert(self, table: str, row: Dict[str, Any]) -> int:
        with self._lock:
            seq = self._sequences.setdefault(table, itertools.count(1))
            row_id = next(seq)
            self._tables.setdefault(table, {})[row_id] = copy.deepcopy(row)
            return row_id

    def update(self, table: str, row_id: int, row: Dict[str, Any]) -> None:
        with self._lock:
            rows = self._tables.get(table, {})
            if row_id not in rows:
                raise RecordNotFound(f"{table} #{row_id} not found")
            rows[row_id] = copy.deepcopy(row)

    def fetch(self, table: str, row_id: int) -> Dict[str, Any]:
        with self._lock:
            try:
                return copy.deepcopy(self._tables[table][row_id])
            except KeyError:
                raise RecordNotFound(f"{table} #{row_id} not found") from None

    def rows(self, table: str) -> List[Tuple[int, Dict[str, Any]]]:
        with self._lock:
            return [(row_id, copy.deepcopy(row)) for row_id, row in self._tables.get(table, {}).items()]

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()
            self._sequences.clear()


default_store = MemoryStore()


class Query:
    """
    A lazy equality query over one record type. Iterating runs it.
    """

    def __init__(self, model: type, criteria: Optional[Dict[str, Any]] = None) -> None:
        self._model = model
        self._criteria = dict(criteria or {})

    @property
    def model(self) -> type:
        return self._model

    @property
    def criteria(self) -> Dict[str, Any]:
        return dict(self._criteria)

    def where(self, **criteria: Any) -> "Query":
        merged = dict(self._criteria)
        merged.update(criteria)
        return Query(self._model, merged)

    def all(self) -> List["Record"]:
        return list(self)

    def first(self) -> Optional["Record"]:
        for record in self:
            return record
        return None

    def count(self) -> int:
        return sum(1 for _ in self)

    def exists(self) -> bool:
        return self.first() is not None

    def __iter__(self) -> Iterator["Record"]:
        model = self._model
        for row_id, row in model.store.rows(model.table_name()):
            if all(row.get(k) == v for k, v in self._criteria.items()):
                yield model._from_row(row_id, row)

    def __len__(self) -> int:
        return self.count()

    def __repr__(self) -> str:
        return f"Query({self._model.__qualname__}, {self._criteria!r})"


class Record:
    """
    Base class for records kept in a MemoryStore.

    Persisted attributes are listed in ``__fields__``; other keyword arguments
    given to the constructor become plain, unsaved attributes.
    """

    __tablename__: ClassVar[Optional[str]] = None
    __fields__: ClassVar[Tuple[str, ...]] = ()
    validates_presence_of: ClassVar[Tuple[str, ...]] = ()
    store: ClassVar[MemoryStore] = default_store

    _pre_create_hooks: ClassVar[List[PreCreateHook]] = []

    def __init_subclass__(cls, **kwargs: Any) -> None:
        cls._pre_create_hooks = []
        super().__init_subclass__(**kwargs)

    def __init__(self, **attributes: Any) -> None:
        self.id: Optional[int] = None
        self.errors: List[str] = []
        for name in self.__fields__:
            setattr(self, name, None)
        for name, value in attributes.items():
            setattr(self, name, value)

    @classmethod
    def table_name(cls) -> str:
        return cls.__tablename__ or cls.__name__.lower()

    @classmethod
    def register_pre_create_hook(cls, hook: PreCreateHook) -> None:
        """
        Add a hook run by validation while the record has never been saved.
        A hook returning False aborts the create.
        """
        cls._pre_create_hooks.append(hook)

    @classmethod
    def pre_create_hooks(cls) -> List[PreCreateHook]:
        """Hooks of this type and its ancestors, ancestors first."""
        hooks: List[PreCreateHook] = []
        for klass in reversed(cls.__mro__):
            hooks.extend(klass.__dict__.get("_pre_create_hooks", ()))
        return hooks

    @property
    def new_record(self) -> bool:
        return self.id is None

    def is_valid(self) -> bool:
        """
        Run the pre-create hooks (new records only) and presence validations.
        """
        self.errors = []
        if self.new_record:
            for hook in self.pre_create_hooks():
                if hook(self) is False:
                    self.errors.append(f"pre-create hook {hook!r} aborted creation")
                    return False
        for name in self.validates_presence_of:
            value = getattr(self, name, None)
            if value is None or value == "":
                self.errors.append(f"{name} can't be blank")
        return not self.errors

    def attributes(self) -> Dict[str, Any]:
        return {name: getattr(self, name, None) for name in self.__fields__}

    def save(self) -> bool:
        if not self.is_valid():
            logger.debug("Not saving invalid %r: %s", self, self.errors)
            return False
        if self.new_record:
            self.id = self.store.insert(self.table_name(), self.attributes())
        else:
            self.store.update(self.table_name(), self.id, self.attributes())
        return True

    def save_or_raise(self) -> None:
        """
        :raises RecordInvalid: If the record could not be saved.
        """
        if not self.save():
            raise RecordInvalid(self)

    def reload(self) -> "Record":
        """
        Replace persisted attributes with the stored values.

        :raises RecordNotFound: If the record was never saved.
        """
        if self.new_record:
            raise RecordNotFound(f"Cannot reload unsaved {type(self).__name__}")
        for name, value in self.store.fetch(self.table_name(), self.id).items():
            setattr(self, name, value)
        return self

    @classmethod
    def create(cls, **attributes: Any) -> "Record":
        """Build and attempt to save a record; check ``new_record`` or ``errors`` for failures."""
        record = cls(**attributes)
        record.save()
        return record

    @classmethod
    def where(cls, **criteria: Any) -> Query:
        return Query(cls, criteria)

    @classmethod
    def all(cls) -> Query:
        return Query(cls)

    @classmethod
    def find(cls, record_id: int) -> "Record":
        return cls._from_row(record_id, cls.store.fetch(cls.table_name(), record_id))

    @classmethod
    def _from_row(cls, row_id: int, row: Dict[str, Any]) -> "Record":
        record = cls(**row)
        record.id = row_id
        return record

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id}>"


class StatefulRecord(Stateful, RecordPersistence, Record):
    """
    A Record with a declarative state machine whose state is saved with it.
    """

    def attributes(self) -> Dict[str, Any]:
        """Persisted attributes; the machine's backing column is always among them."""
        attributes = super().attributes()
        definition = registry.lookup(type(self))
        if definition is not None and definition.column not in attributes:
            attributes[definition.column] = read_field(self, definition.column)
        return attributes
