"""
JSON record store and repository interface

Each collection lives in its own pretty-printed JSON document under the data
directory. All access goes through ``JsonStore.transaction()``, which holds a
process-wide lock for the whole read-modify-write cycle and commits every
touched collection together through a write-ahead journal.
"""

from __future__ import annotations

import copy
import json
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

import structlog

from pdv.core.errors import NotFoundError, StorageError
from pdv.models.base import Record

logger = structlog.get_logger(__name__)

USERS = "users"
PRODUCTS = "products"
SALES = "sales"
TENANTS = "tenants"
SETTINGS = "settings"

# settings is a single object keyed by tenant id, the rest are arrays
COLLECTIONS: dict[str, Callable[[], Any]] = {
    USERS: list,
    PRODUCTS: list,
    SALES: list,
    TENANTS: list,
    SETTINGS: dict,
}

JOURNAL_FILE = "_journal.json"

ModelT = TypeVar("ModelT", bound=Record)


def _write_json_atomic(path: Path, data: Any) -> None:
    tmp_path = path.with_name(path.name + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2, ensure_ascii=False)
        fh.flush()
        os.fsync(fh.fileno())
    os.replace(tmp_path, path)


class JsonStore:
    """Whole-document JSON persistence with a single-writer lock"""

    def __init__(self, data_dir: str | os.PathLike):
        self.data_dir = Path(data_dir)
        self._lock = threading.RLock()

    @property
    def journal_path(self) -> Path:
        return self.data_dir / JOURNAL_FILE

    def path_for(self, name: str) -> Path:
        if name not in COLLECTIONS:
            raise StorageError(f"Unknown collection: {name}")
        return self.data_dir / f"{name}.json"

    def initialize(self) -> None:
        """Create the data directory and any missing document, replaying a pending journal"""
        with self._lock:
            try:
                self.data_dir.mkdir(parents=True, exist_ok=True)
                self.recover()
                for name, default in COLLECTIONS.items():
                    path = self.path_for(name)
                    if not path.exists():
                        _write_json_atomic(path, default())
            except OSError as exc:
                logger.error(f"Error initializing data files: {exc}")
                raise StorageError("Erro ao inicializar os dados") from exc
        logger.info("Data files initialized", data_dir=str(self.data_dir))

    def recover(self) -> bool:
        """Finish a commit interrupted after its journal was written"""
        with self._lock:
            if not self.journal_path.exists():
                return False
            try:
                with open(self.journal_path, encoding="utf-8") as fh:
                    pending = json.load(fh)
            except (OSError, json.JSONDecodeError) as exc:
                raise StorageError("Journal de dados corrompido") from exc
            try:
                for name, document in pending.items():
                    _write_json_atomic(self.path_for(name), document)
                self.journal_path.unlink()
            except OSError as exc:
                logger.error(f"Error replaying journal: {exc}")
                raise StorageError("Erro ao recuperar os dados") from exc
            logger.warning("Replayed pending journal", collections=sorted(pending))
            return True

    def read(self, name: str) -> Any:
        """Snapshot of a whole collection"""
        with self._lock:
            self.recover()
            return self._load(name)

    def _load(self, name: str) -> Any:
        path = self.path_for(name)
        try:
            with open(path, encoding="utf-8") as fh:
                return json.load(fh)
        except FileNotFoundError:
            return COLLECTIONS[name]()
        except (OSError, json.JSONDecodeError) as exc:
            logger.error(f"Error reading {path.name}: {exc}")
            raise StorageError(f"Erro ao ler {name}") from exc

    def _commit(self, documents: dict[str, Any]) -> None:
        if not documents:
            return
        if len(documents) == 1:
            [(name, document)] = documents.items()
            try:
                _write_json_atomic(self.path_for(name), document)
            except OSError as exc:
                logger.error(f"Error writing collection {name}: {exc}")
                raise StorageError("Erro ao salvar os dados") from exc
            return

        try:
            _write_json_atomic(self.journal_path, documents)
        except OSError as exc:
            # no journal, no collection touched
            logger.error(f"Error writing journal for {sorted(documents)}: {exc}")
            raise StorageError("Erro ao salvar os dados") from exc

        try:
            for name, document in documents.items():
                _write_json_atomic(self.path_for(name), document)
            self.journal_path.unlink()
        except OSError as exc:
            logger.error(f"Error writing collections {sorted(documents)}: {exc}")
            # The journal holds the whole commit; if replaying it fails too, it
            # stays on disk and every later transaction retries it first.
            self.recover()

    @contextmanager
    def transaction(self) -> Iterator["UnitOfWork"]:
        """Hold the store lock and commit dirty collections if the block succeeds

        A pending journal is applied before anything is read; while it cannot
        be applied, every transaction fails with StorageError.
        """
        with self._lock:
            self.recover()
            uow = UnitOfWork(self)
            yield uow
            uow.commit()


class UnitOfWork:
    """Collections loaded inside one transaction, plus what changed"""

    def __init__(self, store: JsonStore):
        self._store = store
        self._documents: dict[str, Any] = {}
        self._dirty: set[str] = set()

    def collection(self, name: str) -> Any:
        if name not in self._documents:
            self._documents[name] = self._store._load(name)
        return self._documents[name]

    def mark_dirty(self, name: str) -> None:
        self._dirty.add(name)

    def repository(self, name: str, model: type[ModelT]) -> "Repository[ModelT]":
        return Repository(self, name, model)

    def commit(self) -> None:
        self._store._commit({name: self._documents[name] for name in sorted(self._dirty)})
        self._dirty.clear()


class Repository(Generic[ModelT]):
    """get/list/insert/update by id over one array collection"""

    def __init__(self, uow: UnitOfWork, name: str, model: type[ModelT]):
        self._uow = uow
        self.name = name
        self.model = model

    @property
    def _rows(self) -> list[dict]:
        return self._uow.collection(self.name)

    def _parse(self, row: dict) -> ModelT:
        return self.model.model_validate(copy.deepcopy(row))

    def list(self, tenant_id: Optional[int] = None) -> list[ModelT]:
        records = [self._parse(row) for row in self._rows]
        if tenant_id is None:
            return records
        return [r for r in records if getattr(r, "tenant_id", None) == tenant_id]

    def find(self, predicate: Callable[[ModelT], bool]) -> Optional[ModelT]:
        for row in self._rows:
            record = self._parse(row)
            if predicate(record):
                return record
        return None

    def get(self, record_id: int, tenant_id: Optional[int] = None) -> Optional[ModelT]:
        def matches(record: ModelT) -> bool:
            if record.id != record_id:
                return False
            return tenant_id is None or getattr(record, "tenant_id", None) == tenant_id
        return self.find(matches)

    def next_id(self) -> int:
        ids = [row.get("id") for row in self._rows if isinstance(row.get("id"), int)]
        return max(ids) + 1 if ids else 1

    def insert(self, record: ModelT) -> ModelT:
        record.id = self.next_id()
        self._rows.append(record.to_document())
        self._uow.mark_dirty(self.name)
        return record

    def update(self, record: ModelT) -> ModelT:
        for index, row in enumerate(self._rows):
            if row.get("id") == record.id:
                self._rows[index] = record.to_document()
                self._uow.mark_dirty(self.name)
                return record
        raise NotFoundError(f"{self.name}: registro {record.id} não encontrado")
