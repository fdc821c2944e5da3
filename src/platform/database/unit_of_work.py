"""
Unit of Work Pattern - one database transaction shared by several repositories

Architecture:
- UoW owns the session lifecycle (opened on enter, closed on exit)
- UoW owns commit/rollback; leaving the block without commit() rolls back
- Repositories obtained from the UoW share its session, so all their reads and
  writes happen inside the same transaction
"""

from __future__ import annotations

import abc
from contextlib import AsyncExitStack
from typing import TYPE_CHECKING, AsyncContextManager, Callable, Optional

import anyio
from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.mealshare.app.interface.i_meal_command_repo import IMealCommandRepo
    from src.service.mealshare.app.interface.i_meal_query_repo import IMealQueryRepo
    from src.service.mealshare.app.interface.i_reservation_command_repo import (
        IReservationCommandRepo,
    )
    from src.service.mealshare.app.interface.i_reservation_query_repo import (
        IReservationQueryRepo,
    )


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the MealShare service

    Usage:
        async with uow:
            if not await uow.meal_command_repo.decrement_portions(meal_id=meal_id):
                raise SoldOutError(...)
            await uow.reservation_command_repo.create(...)
            await uow.commit()
    """

    # Meal repositories
    meal_command_repo: IMealCommandRepo
    meal_query_repo: IMealQueryRepo

    # Reservation repositories
    reservation_command_repo: IReservationCommandRepo
    reservation_query_repo: IReservationQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> Optional[bool]:
        # Shielded: an expired storage timeout must not cancel the rollback
        with anyio.CancelScope(shield=True):
            await self.rollback()
        return None

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    The session comes from Database.session(), so the whole block runs under the
    storage timeout and driver faults surface as StorageUnavailableError.
    """

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory
        self._exit_stack: AsyncExitStack | None = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.mealshare.driven_adapter.repo.meal_command_repo_impl import (
            MealCommandRepoImpl,
        )
        from src.service.mealshare.driven_adapter.repo.meal_query_repo_impl import (
            MealQueryRepoImpl,
        )
        from src.service.mealshare.driven_adapter.repo.reservation_command_repo_impl import (
            ReservationCommandRepoImpl,
        )
        from src.service.mealshare.driven_adapter.repo.reservation_query_repo_impl import (
            ReservationQueryRepoImpl,
        )

        self._exit_stack = AsyncExitStack()
        self.session = await self._exit_stack.enter_async_context(self.session_factory())

        # Create repositories with shared session
        self.meal_command_repo = MealCommandRepoImpl(session=self.session)
        self.meal_query_repo = MealQueryRepoImpl(session=self.session)
        self.reservation_command_repo = ReservationCommandRepoImpl(session=self.session)
        self.reservation_query_repo = ReservationQueryRepoImpl(session=self.session)

        await super().__aenter__()
        return self

    async def __aexit__(self, *args) -> Optional[bool]:
        if self._exit_stack is None:
            raise RuntimeError('Unit of work was not entered')
        exit_stack, self._exit_stack = self._exit_stack, None
        try:
            await super().__aexit__(*args)
        finally:
            # Closes the session and applies the storage guard to whatever escaped
            suppressed = await exit_stack.__aexit__(*args)
        return suppressed

    async def _commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
