# storefront/data/database.py
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    #sqlite ignores ON DELETE CASCADE / SET NULL unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Persistence gateway: owns the engine (and its connection pool) and hands out
    sessions. Built by the entry point and passed around explicitly, connect() and
    dispose() are called from the application lifespan.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs):
        self.url = url
        self.echo = echo
        self.engine_kwargs = engine_kwargs
        self.engine: Engine | None = None
        self._sessionmaker: sessionmaker | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    def connect(self) -> None:
        if self.engine is not None:
            return

        kwargs = dict(self.engine_kwargs)
        if self.is_sqlite:
            kwargs.setdefault("connect_args", {"check_same_thread": False})
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                # one shared connection, otherwise every checkout sees a fresh empty db
                kwargs.setdefault("poolclass", StaticPool)
        else:
            kwargs.setdefault("pool_pre_ping", True)

        self.engine = create_engine(self.url, echo=self.echo, **kwargs)
        if self.is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self._sessionmaker = sessionmaker(bind=self.engine, autoflush=False)
        logger.info(f"Database engine created for {self.engine.url.render_as_string(hide_password=True)}")

    def create_all(self) -> None:
        # import the models so they register on Base.metadata
        import storefront.data.models  # noqa: F401

        Base.metadata.create_all(bind=self._require_engine())
        logger.info(f"Tables ready: {sorted(Base.metadata.tables.keys())}")

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self._require_engine())

    def dispose(self) -> None:
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self._sessionmaker = None
        logger.info("Database engine disposed")

    def session(self) -> Session:
        if self._sessionmaker is None:
            raise RuntimeError("Database.connect() has not been called")
        return self._sessionmaker()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on error."""
        db = self.session()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def ping(self) -> bool:
        try:
            with self._require_engine().connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database ping failed: {e}")
            return False

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise RuntimeError("Database.connect() has not been called")
        return self.engine
