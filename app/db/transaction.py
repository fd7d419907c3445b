"""
One unit of work, one transaction.

run_in_transaction opens a fresh Session, begins a transaction, hands the
Session to the unit of work and commits only if the unit of work returns
normally. Any exception rolls the transaction back and is re-raised as is,
so classified HTTP errors reach the dispatcher untouched.

The request context is checked before every statement the unit of work
executes and once more before commit. A cancelled request therefore stops
at its next database call and never commits.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from sqlalchemy import event
from sqlalchemy.orm import Session, sessionmaker

from app.core.context import RequestContext
from app.db.session import SessionLocal

logger = logging.getLogger("app.db")

T = TypeVar("T")


@dataclass(frozen=True)
class TxOptions:
    isolation_level: Optional[str] = None
    read_only: bool = False

    def execution_options(self) -> dict:
        options = {}
        if self.isolation_level:
            options["isolation_level"] = self.isolation_level
        if self.read_only:
            # Only the PostgreSQL dialects act on this; others ignore it
            options["postgresql_readonly"] = True
        return options


def _watch_cancellation(db: Session, ctx: RequestContext) -> None:
    @event.listens_for(db, "do_orm_execute")
    def _before_execute(orm_execute_state):
        ctx.raise_if_cancelled()

    @event.listens_for(db, "before_flush")
    def _before_flush(session, flush_context, instances):
        ctx.raise_if_cancelled()


def run_in_transaction(
    ctx: RequestContext,
    options: TxOptions,
    unit_of_work: Callable[[Session], T],
    session_factory: sessionmaker = SessionLocal,
) -> T:
    ctx.raise_if_cancelled()

    db = session_factory()
    try:
        _watch_cancellation(db, ctx)
        # Begins the transaction with the requested options
        db.connection(execution_options=options.execution_options())

        result = unit_of_work(db)

        ctx.raise_if_cancelled()
        db.commit()
        return result
    except Exception:
        logger.debug("Rolling back transaction", exc_info=True)
        db.rollback()
        raise
    finally:
        db.close()
