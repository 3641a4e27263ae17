"""INSERT ... ON CONFLICT DO UPDATE for the dialects we run on."""

from collections.abc import Sequence
from typing import Any, TypeVar

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

M = TypeVar("M")


async def upsert_row(
    session: AsyncSession,
    model: type[M],
    values: dict[str, Any],
    conflict_keys: Sequence[str],
    update_keys: Sequence[str],
) -> M:
    """Insert ``values`` or, on a conflict over ``conflict_keys``, overwrite ``update_keys``.

    A single statement, so concurrent writers for the same key converge to the
    last write instead of failing. Returns the resulting row, refreshing any
    copy already loaded in the session.
    """
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(model).values(**values)
    elif dialect == "sqlite":
        stmt = sqlite.insert(model).values(**values)
    else:
        raise NotImplementedError(f"Upsert is not supported on {dialect}")

    stmt = stmt.on_conflict_do_update(
        index_elements=list(conflict_keys),
        set_={key: stmt.excluded[key] for key in update_keys},
    )
    result = await session.scalars(
        stmt.returning(model),
        execution_options={"populate_existing": True},
    )
    return result.one()
