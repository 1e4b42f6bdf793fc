# food_ordering/data/unit_of_work.py
import contextlib

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from food_ordering.domain.errors import OrderingError, StorageError
from food_ordering.utils.logging import get_logger

logger = get_logger(__name__)


class UnitOfWork:
    """
    Granica transakcji dla zapisow wielotabelowych.

        with UnitOfWork(db) as uow:
            ...zapisy przez repo...
            uow.commit()

    Wyjscie bez commit() albo z wyjatkiem -> rollback calej transakcji.
    Bledy SQLAlchemy wychodza na zewnatrz jako StorageError, bledy domenowe
    przechodza bez zmian.
    """

    def __init__(self, db: Session, name: str = "unit-of-work"):
        self.db = db
        self.name = name
        self.committed = False

    def __enter__(self) -> "UnitOfWork":
        # sesja mogla juz otworzyc transakcje przy odczytach walidacji
        self.committed = False
        return self

    def commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{self.name}: commit failed: {e}", exc_info=True)
            raise StorageError() from e
        self.committed = True

    def rollback(self) -> None:
        self.db.rollback()

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None and self.committed:
            return False

        self.rollback()

        if exc_type is None:
            logger.warning(f"{self.name}: left without commit, rolled back")
            return False

        if issubclass(exc_type, OrderingError):
            return False

        if issubclass(exc_type, SQLAlchemyError):
            logger.error(f"{self.name}: storage failure, rolled back: {exc}", exc_info=(exc_type, exc, tb))
            raise StorageError() from exc

        logger.error(f"{self.name}: unexpected failure, rolled back: {exc}")
        return False


@contextlib.contextmanager
def storage_guard(db: Session, name: str = "read"):
    """
    Odczyty poza UnitOfWork (walidacje, widoki koszyka i zamowien).
    Blad SQLAlchemy -> StorageError, sesja wraca do uzywalnego stanu.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{name}: storage failure: {e}", exc_info=True)
        raise StorageError("Storage unavailable") from e
