"""Document collection stored as JSON rows through SQLAlchemy."""
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from book_catalog.core.exceptions import StoreError
from book_catalog.core.logging import get_logger
from book_catalog.models.document import Document
from book_catalog.store.base import ID_FIELD, matches, new_object_id

logger = get_logger("store.sql")


def _to_document(row: Document) -> dict:
    return {**row.body, ID_FIELD: row.id}


class SqlDocumentCollection:
    """Collection of documents sharing the ``documents`` table.

    Every call runs in its own session and commits before returning, so a
    write is visible to the next call as soon as it completes. Filters on
    ``_id`` go to the primary key; other keys are matched in Python against
    the decoded JSON body, which keeps the queries portable across SQLite and
    PostgreSQL.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], name: str):
        self._session_factory = session_factory
        self.name = name

    def _select(self, filter: dict):
        query = select(Document).where(Document.collection == self.name)
        if ID_FIELD in filter:
            query = query.where(Document.id == filter[ID_FIELD])
        # Insertion order
        return query.order_by(Document.created_at, Document.id)

    @staticmethod
    def _body_filter(filter: dict) -> dict:
        return {k: v for k, v in filter.items() if k != ID_FIELD}

    async def _matching_rows(self, session: AsyncSession, filter: dict) -> list[Document]:
        result = await session.execute(self._select(filter))
        body_filter = self._body_filter(filter)
        return [row for row in result.scalars().all() if matches(row.body, body_filter)]

    async def find(self, filter: dict) -> list[dict]:
        try:
            async with self._session_factory() as session:
                rows = await self._matching_rows(session, filter)
                return [_to_document(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"find on {self.name} failed: {e}")
            raise StoreError(operation="find") from e

    async def find_one(self, filter: dict) -> Optional[dict]:
        try:
            async with self._session_factory() as session:
                rows = await self._matching_rows(session, filter)
                return _to_document(rows[0]) if rows else None
        except SQLAlchemyError as e:
            logger.error(f"find_one on {self.name} failed: {e}")
            raise StoreError(operation="find_one") from e

    async def insert_one(self, document: dict) -> str:
        body = {k: v for k, v in document.items() if k != ID_FIELD}
        doc_id = new_object_id()
        row = Document(id=doc_id, collection=self.name, body=body)
        try:
            async with self._session_factory() as session:
                session.add(row)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"insert_one on {self.name} failed: {e}")
            raise StoreError(operation="insert_one") from e
        return doc_id

    async def update_one(self, filter: dict, patch: dict) -> int:
        body_patch = {k: v for k, v in patch.items() if k != ID_FIELD}
        try:
            async with self._session_factory() as session:
                rows = await self._matching_rows(session, filter)
                if not rows:
                    return 0
                row = rows[0]
                # Reassign so the JSON column is flagged dirty
                row.body = {**row.body, **body_patch}
                await session.commit()
                return 1
        except SQLAlchemyError as e:
            logger.error(f"update_one on {self.name} failed: {e}")
            raise StoreError(operation="update_one") from e

    async def delete_one(self, filter: dict) -> int:
        try:
            async with self._session_factory() as session:
                rows = await self._matching_rows(session, filter)
                if not rows:
                    return 0
                await session.execute(delete(Document).where(Document.id == rows[0].id))
                await session.commit()
                return 1
        except SQLAlchemyError as e:
            logger.error(f"delete_one on {self.name} failed: {e}")
            raise StoreError(operation="delete_one") from e
