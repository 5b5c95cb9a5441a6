# ferrelog/database.py
import logging
from contextlib import contextmanager

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel, create_engine, Session

from ferrelog.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# ---------------------------------------------------------
# Supabase Postgres connection (via pooler)
#
# - sslmode=require   : enforce SSL when running in the cloud
# - pool_size=1       : keep only 1 connection to the Supabase pooler
# - max_overflow=0    : do not open extra connections beyond the pool
# - pool_pre_ping=True: validate connections before using them
#
# Supabase Session mode limits the number of clients; the SQLAlchemy
# default pool (5+) hits "MaxClientsInSessionMode: max clients reached".
#
# Local SQLite URLs get a plain engine.
# ---------------------------------------------------------

db_url = settings.DATABASE_URL
is_postgres = db_url.startswith(("postgres://", "postgresql"))

engine_kwargs: dict = {"echo": False, "pool_pre_ping": True}

if is_postgres:
    # Append sslmode=require if it is not already present
    if "sslmode=" not in db_url:
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"
    engine_kwargs.update(pool_size=1, max_overflow=0)
elif db_url.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}

engine = create_engine(db_url, **engine_kwargs)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session


@contextmanager
def unit_of_work(
    session: Session,
    detail: str,
    conflict_detail: str | None = None,
):
    """
    Run repository writes and commit them together, or roll all back.

    Status changes and their related rows (shipment, evidence) are
    flushed into the same session, so either all of them land or none.
    Errors raised by a flush inside the block take the same path as a
    failed commit.

    Usage:

        with unit_of_work(session, "Error al guardar el embarque"):
            order_repo.update(session, order)
            shipment_repo.create(session, shipment)

    Raises:
        HTTPException(409): with `conflict_detail` on a constraint
            violation, when given.
        HTTPException(500): with `detail` on any other database error.
    """
    try:
        yield session
        session.commit()
    except IntegrityError:
        session.rollback()
        if conflict_detail is None:
            logger.exception("Database write failed: %s", detail)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=detail,
            )
        logger.warning("Constraint violation: %s", conflict_detail)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=conflict_detail,
        )
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Database write failed: %s", detail)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )
