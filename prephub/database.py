from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

import logging
logger = logging.getLogger("prephub.database")


Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _sqlite_pragmas(dbapi_conn, _record):
    # FK cascade 要靠 foreign_keys；synchronous=FULL 讓每次 commit 都落地
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA synchronous=FULL")
    cursor.close()


class Store:
    """Embedded SQLite store.

    Built once by the app factory and handed to request handlers through
    ``app.state.store``. Nothing touches the database before ``open()`` or
    after ``close()``.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Engine | None = None
        self._sessionmaker: sessionmaker | None = None

    def open(self) -> "Store":
        if self.engine is not None:
            return self

        if self.url.startswith("sqlite:///"):
            db_file = self.url[len("sqlite:///"):]
            if db_file and db_file != ":memory:":
                Path(db_file).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(
            self.url,
            echo=self.echo,
            connect_args={"check_same_thread": False},
        )
        event.listen(self.engine, "connect", _sqlite_pragmas)
        self._sessionmaker = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )

        # 建立資料表（若不存在）
        from prephub import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

        logger.info("Store opened: %s", self.url)
        return self

    def close(self) -> None:
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self._sessionmaker = None
        logger.info("Store closed: %s", self.url)

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    def new_session(self) -> Session:
        if self._sessionmaker is None:
            raise RuntimeError("Store is not open")
        return self._sessionmaker()

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self.new_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


def get_db(request: Request) -> Iterator[Session]:
    store: Store = request.app.state.store
    db = store.new_session()
    try:
        yield db
    finally:
        db.close()
