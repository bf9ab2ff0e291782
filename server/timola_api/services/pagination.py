"""Offset pagination shared by the admin list operations."""

import asyncio
from typing import Any, List, Tuple

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.common import Pagination


async def _count_rows(db: AsyncSession, stmt: Select) -> int:
    # An AsyncSession runs one statement at a time; the count gets its own.
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    async with AsyncSession(db.bind) as count_db:
        return (await count_db.execute(count_stmt)).scalar_one()


async def _page_rows(db: AsyncSession, stmt: Select, page: int, limit: int) -> List[Any]:
    result = await db.execute(stmt.offset((page - 1) * limit).limit(limit))
    return list(result.scalars().all())


async def fetch_page(
    db: AsyncSession,
    stmt: Select,
    page: int,
    limit: int,
) -> Tuple[List[Any], Pagination]:
    """
    Run ``stmt`` for one page and count every row it matches.

    The page query and the count query are issued together and awaited
    jointly; if either fails the whole call fails.

    Args:
        db: Database session
        stmt: Filtered and ordered select of a single entity
        page: 1-based page number
        limit: Page size

    Returns:
        The page's entities and the pagination envelope
    """
    items, total = await asyncio.gather(
        _page_rows(db, stmt, page, limit),
        _count_rows(db, stmt),
    )

    return items, Pagination.build(total=total, page=page, limit=limit)
