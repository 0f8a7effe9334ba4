import logging
from contextlib import contextmanager

from flask import current_app
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from .models import Base

logger = logging.getLogger(__name__)


class Store:
    """Connection to the record store, shared by every request.

    Built once per application and passed around explicitly. ``init`` must
    run before the first request and ``close`` on shutdown; connection
    pooling is left to the SQLAlchemy engine.
    """

    def __init__(self, database_uri, **engine_options):
        self.database_uri = database_uri
        self.engine_options = engine_options
        self.engine = None
        self._session_factory = None

    @property
    def initialized(self):
        return self.engine is not None

    def init(self):
        if self.initialized:
            return self
        options = dict(self.engine_options)
        # bound values (password hashes) must not end up in error messages
        options.setdefault('hide_parameters', True)
        self.engine = create_engine(self.database_uri, **options)
        self._session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )
        Base.metadata.create_all(bind=self.engine)
        logger.info("Connected to store at %s", self.engine.url.render_as_string(hide_password=True))
        return self

    @contextmanager
    def session(self):
        if not self.initialized:
            raise RuntimeError("Store is not initialized")
        session = self._session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self):
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Store connection closed")
        self.engine = None
        self._session_factory = None


def get_store():
    return current_app.extensions['store']
