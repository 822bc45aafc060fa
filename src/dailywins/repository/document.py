# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Any, Callable, Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from dailywins import configuration
from dailywins.model.collection import Collection, CollectionName

Document = dict[str, Any]


class DocumentNotFoundError(Exception):
    """Raised when no document has the requested id."""

    pass


class DocumentRepository:
    """
    One YAML file per document, one directory per collection.

    Documents are stored in the same shape the CMS returns them, so the
    local backend and the REST backend hand identical records to the
    services.
    """

    def __init__(self, collection: CollectionName, get_dir: Callable[[], Path]) -> None:
        self.collection = collection
        self._get_dir = get_dir
        self._documents: Optional[list[Document]] = None
        self.is_dirty = False
        self._dirty_ids: set[int] = set()

    @property
    def documents(self) -> list[Document]:
        if self._documents is None:
            self.__load_data()
        if self._documents is None:
            raise ValueError()
        return self._documents

    def __load_data(self) -> None:
        self._documents = []
        directory = self._get_dir()
        if not directory.is_dir():
            return
        for file_path in sorted(directory.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_document = load(file_path.read_text(), Loader=Loader)
            if raw_document is not None:
                self._documents.append(raw_document)

    def __save_data(self) -> None:
        directory = self._get_dir()
        directory.mkdir(parents=True, exist_ok=True)
        for document in self.documents:
            if document["id"] in self._dirty_ids:
                file_path = directory / f"{document['id']}.yaml"
                file_path.write_text(dump(document, Dumper=Dumper))
        self._dirty_ids.clear()

    def flush(self) -> bool:
        if self._documents is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        """Drop cached documents so the next access reloads from disk."""
        self._documents = None
        self.is_dirty = False
        self._dirty_ids.clear()

    def next_id(self) -> int:
        return max((document["id"] for document in self.documents), default=0) + 1

    def save_new_document(self, document: Document) -> int:
        self.is_dirty = True

        document["id"] = self.next_id()
        self.documents.append(document)
        self._dirty_ids.add(document["id"])

        return document["id"]

    def modify_document(self, id: int, changes: Document) -> Document:
        document = self.__find(id)
        self.is_dirty = True
        self._dirty_ids.add(id)
        document.update(changes)
        return deepcopy(document)

    def get_all_documents(self) -> list[Document]:
        return deepcopy(self.documents)

    def get_document(self, id: int) -> Document:
        return deepcopy(self.__find(id))

    def __find(self, id: int) -> Document:
        for document in self.documents:
            if document["id"] == id:
                return document
        raise DocumentNotFoundError(f"No {self.collection} document with id {id}")


WIN_REPO = DocumentRepository(Collection.WINS, lambda: configuration.DATA_WINS_DIR)
JOURNAL_REPO = DocumentRepository(
    Collection.JOURNALS, lambda: configuration.DATA_JOURNALS_DIR
)
