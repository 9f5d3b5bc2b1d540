"""
PostgreSQL Catalog Store.

Implements the catalog store contract with asyncpg. Access failures surface
as ``RepositoryError``; a clash on the unique code index surfaces as
``DuplicateCodeError``.
"""

import time
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import AsyncIterator, List, Optional

import asyncpg
from asyncpg import Pool

from internal.domain.catalog_item import CatalogItem
from internal.domain.errors import DuplicateCodeError, RepositoryError, ValidationError
from internal.infrastructure.metrics import DB_QUERY_DURATION
from pkg.logger.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = """
    id, name, code, description, price, category, active,
    created_at, updated_at
"""


class PostgresCatalogStore:
    """
    PostgreSQL implementation of the Catalog Store.

    Uses asyncpg for async database operations against the ``catalog_items``
    table (see ``migrations/001_create_catalog_items.sql``).
    """

    def __init__(self, pool: Pool) -> None:
        """
        Initialize the store.

        Args:
            pool: asyncpg connection pool.
        """
        self._pool = pool

    @asynccontextmanager
    async def _connection(self, operation: str) -> AsyncIterator[asyncpg.Connection]:
        """
        Acquire a connection and translate driver failures.

        Args:
            operation: Operation name for logs and metrics.
        """
        start = time.perf_counter()
        try:
            async with self._pool.acquire() as conn:
                yield conn
        except asyncpg.UniqueViolationError:
            raise
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error(
                "Catalog store operation failed",
                operation=operation,
                error=str(e),
            )
            raise RepositoryError(f"Failed to {operation.replace('_', ' ')}", e) from e
        finally:
            DB_QUERY_DURATION.labels(operation=operation).observe(
                time.perf_counter() - start
            )

    async def save(self, item: CatalogItem) -> CatalogItem:
        """
        Insert a new item or update an existing one.

        Args:
            item: The item to persist.

        Returns:
            The persisted item, with its id assigned.

        Raises:
            DuplicateCodeError: If another item already uses the code.
            RepositoryError: If the database cannot be accessed.
        """
        try:
            async with self._connection("save_item") as conn:
                if item.id is None:
                    item_id = await conn.fetchval(
                        """
                        INSERT INTO catalog_items (
                            name, code, description, price, category, active,
                            created_at, updated_at
                        ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                        RETURNING id
                        """,
                        item.name,
                        item.code,
                        item.description,
                        item.price,
                        item.category,
                        item.active,
                        item.created_at,
                        item.updated_at,
                    )
                    item.assign_id(item_id)
                    logger.debug("Item inserted", item_id=item_id, code=item.code)
                else:
                    status = await conn.execute(
                        """
                        UPDATE catalog_items
                        SET name = $2, description = $3, price = $4,
                            category = $5, active = $6, updated_at = $7
                        WHERE id = $1
                        """,
                        item.id,
                        item.name,
                        item.description,
                        item.price,
                        item.category,
                        item.active,
                        item.updated_at,
                    )
                    if status == "UPDATE 0":
                        logger.error("Item to update no longer exists", item_id=item.id)
                        raise RepositoryError(
                            f"Failed to save item: item {item.id} no longer exists"
                        )
        except asyncpg.UniqueViolationError:
            logger.warning("Unique code constraint violated", code=item.code)
            raise DuplicateCodeError(item.code)

        return item

    async def find_by_id(self, item_id: int) -> Optional[CatalogItem]:
        async with self._connection("find_by_id") as conn:
            row = await conn.fetchrow(
                f"SELECT {_COLUMNS} FROM catalog_items WHERE id = $1",
                item_id,
            )
        return self._row_to_entity(row) if row else None

    async def find_by_code(self, code: str) -> Optional[CatalogItem]:
        async with self._connection("find_by_code") as conn:
            row = await conn.fetchrow(
                f"SELECT {_COLUMNS} FROM catalog_items WHERE code = $1",
                code,
            )
        return self._row_to_entity(row) if row else None

    async def find_all(self) -> List[CatalogItem]:
        return await self._fetch_list(
            "find_all",
            f"SELECT {_COLUMNS} FROM catalog_items ORDER BY id",
        )

    async def find_by_category(self, category: str) -> List[CatalogItem]:
        return await self._fetch_list(
            "find_by_category",
            f"""
            SELECT {_COLUMNS} FROM catalog_items
            WHERE LOWER(category) = LOWER($1) AND active = true
            ORDER BY id
            """,
            category.strip(),
        )

    async def find_active(self) -> List[CatalogItem]:
        return await self._fetch_list(
            "find_active",
            f"SELECT {_COLUMNS} FROM catalog_items WHERE active = true ORDER BY id",
        )

    async def find_by_price_range(
        self,
        min_price: Optional[Decimal],
        max_price: Optional[Decimal],
    ) -> List[CatalogItem]:
        return await self._fetch_list(
            "find_by_price_range",
            f"""
            SELECT {_COLUMNS} FROM catalog_items
            WHERE ($1::numeric IS NULL OR price >= $1)
              AND ($2::numeric IS NULL OR price <= $2)
            ORDER BY id
            """,
            min_price,
            max_price,
        )

    async def exists_by_code(self, code: str) -> bool:
        async with self._connection("exists_by_code") as conn:
            return await conn.fetchval(
                "SELECT EXISTS(SELECT 1 FROM catalog_items WHERE code = $1)",
                code,
            )

    async def count_all(self) -> int:
        async with self._connection("count_all") as conn:
            return await conn.fetchval("SELECT COUNT(*) FROM catalog_items")

    async def count_active(self) -> int:
        async with self._connection("count_active") as conn:
            return await conn.fetchval(
                "SELECT COUNT(*) FROM catalog_items WHERE active = true"
            )

    async def _fetch_list(self, operation: str, query: str, *args) -> List[CatalogItem]:
        async with self._connection(operation) as conn:
            rows = await conn.fetch(query, *args)
        return [self._row_to_entity(row) for row in rows]

    def _row_to_entity(self, row: asyncpg.Record) -> CatalogItem:
        """
        Convert a database row to a CatalogItem.

        Raises:
            RepositoryError: If the stored row breaks an item rule.
        """
        try:
            return CatalogItem.restore(
                id=row["id"],
                name=row["name"],
                code=row["code"],
                description=row["description"],
                price=row["price"],
                category=row["category"],
                active=row["active"],
                created_at=row["created_at"],
                updated_at=row["updated_at"],
            )
        except ValidationError as e:
            logger.error(
                "Stored item is invalid",
                item_id=row["id"],
                field=e.field,
                error=e.message,
            )
            raise RepositoryError(f"Stored item {row['id']} is invalid: {e.message}", e) from e


async def create_pool(dsn: str, min_size: int = 10, max_size: int = 50) -> Pool:
    """
    Create an asyncpg connection pool.

    Args:
        dsn: Database connection string.
        min_size: Minimum pool size.
        max_size: Maximum pool size.

    Returns:
        asyncpg connection pool.
    """
    return await asyncpg.create_pool(
        dsn=dsn,
        min_size=min_size,
        max_size=max_size,
    )
