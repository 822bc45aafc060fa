# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional

from dailywins import time
from dailywins.model.collection import Collection, CollectionName
from dailywins.query.sort import sort_documents
from dailywins.repository.document import (
    JOURNAL_REPO,
    WIN_REPO,
    DocumentNotFoundError,
    DocumentRepository,
)
from dailywins.source.base import DataSourceError, Document, ListQuery

logger = logging.getLogger(__name__)


class LocalDataSource:
    """
    File-backed stand-in for the CMS.

    Keeps the CMS behaviour the services rely on: integer ids, an `_order`
    marker on wins, createdAt/updatedAt stamps and at most one journal per
    local calendar day.
    """

    def __init__(
        self,
        win_repo: DocumentRepository = WIN_REPO,
        journal_repo: DocumentRepository = JOURNAL_REPO,
    ) -> None:
        self._repos: dict[str, DocumentRepository] = {
            Collection.WINS: win_repo,
            Collection.JOURNALS: journal_repo,
        }

    def list(
        self, collection: CollectionName, query: Optional[ListQuery] = None
    ) -> list[Document]:
        query = query or {}
        documents = self.__repo(collection).get_all_documents()

        date_range = query.get("date_range")
        if date_range is not None:
            start, end = date_range
            documents = [
                document
                for document in documents
                if document.get("date") is not None
                and start <= time.datetime_from_str(document["date"]) < end
            ]

        sort = query.get("sort")
        if sort:
            documents = sort_documents(documents, sort)

        limit = query.get("limit")
        if limit is not None and limit > 0:
            documents = documents[:limit]
        return documents

    def create(self, collection: CollectionName, payload: Document) -> Document:
        repo = self.__repo(collection)
        now = time.datetime_to_iso_str(time.now_utc())
        document = deepcopy(payload)
        if collection == Collection.JOURNALS:
            self.__ensure_unique_day(document.get("date"), exclude_id=None)
            document.setdefault("wins", [])
        else:
            document.setdefault("active", True)
            document.setdefault("description", None)
            document["_order"] = f"{repo.next_id():08d}"
        document["createdAt"] = now
        document["updatedAt"] = now
        id = repo.save_new_document(document)
        logger.debug("created %s %s", collection, id)
        return repo.get_document(id)

    def update(self, collection: CollectionName, id: int, payload: Document) -> Document:
        repo = self.__repo(collection)
        changes = deepcopy(payload)
        if collection == Collection.JOURNALS and "date" in changes:
            self.__ensure_unique_day(changes["date"], exclude_id=id)
        changes["updatedAt"] = time.datetime_to_iso_str(time.now_utc())
        try:
            document = repo.modify_document(id, changes)
        except DocumentNotFoundError as e:
            raise DataSourceError(str(e)) from e
        logger.debug("updated %s %s", collection, id)
        return document

    def __repo(self, collection: CollectionName) -> DocumentRepository:
        if collection not in self._repos:
            raise DataSourceError(f"Unknown collection: {collection}")
        return self._repos[collection]

    def __ensure_unique_day(self, date: Optional[str], exclude_id: Optional[int]) -> None:
        day_key = time.key_of(date)
        if not day_key:
            raise DataSourceError(f"Invalid journal date: {date!r}")
        for document in self._repos[Collection.JOURNALS].documents:
            if document["id"] == exclude_id:
                continue
            if time.key_of(document.get("date")) == day_key:
                raise DataSourceError(f"A journal already exists for {day_key}")
