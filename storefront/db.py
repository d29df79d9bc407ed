from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from storefront.config import config
from storefront.exceptions import DatabaseConnectionError
from storefront.logging_setup import get_logger

log = get_logger('db')

class Database:
    """Connection to the store database, shared by the whole client.

    The client talks to one database per run. ``initialize`` opens the
    engine and checks that the server answers; every operation then works
    inside its own ``session_scope``.
    """

    _instance = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Database, cls).__new__(cls)
            cls._instance._engine = None
            cls._instance._session_factory = None
        return cls._instance

    def initialize(self, connection_string=None):
        """Open the engine and verify the server answers.

        Args:
            connection_string: Database URL; built from the settings file
                               when omitted

        Raises:
            DatabaseConnectionError: If the database can't be reached
        """
        if self._engine is not None:
            self.close()

        url = make_url(connection_string or config.get_db_url())
        options = {'echo': config.get_boolean('DATABASE', 'echo', False)}

        # SQLite's default pools reject the queue pool arguments
        if url.get_backend_name() != 'sqlite':
            options.update(config.pool_config)

        log.info(f"Connecting to {url.render_as_string(hide_password=True)}")

        try:
            engine = create_engine(url, **options)
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except Exception as e:
            log.error(f"Connection check failed: {str(e)}")
            raise DatabaseConnectionError(f"Unable to connect to database: {str(e)}")

        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, autoflush=False)
        log.info("Database connection established")

    @property
    def engine(self):
        """Get the database engine, connecting with the settings file if needed."""
        if self._engine is None:
            self.initialize()
        return self._engine

    @property
    def is_connected(self):
        return self._engine is not None

    def create_all_tables(self):
        """Create every table mapped in storefront.models."""
        from storefront.models import Base
        Base.metadata.create_all(self.engine)

    def drop_all_tables(self):
        """Drop every table mapped in storefront.models."""
        from storefront.models import Base
        Base.metadata.drop_all(self.engine)

    def new_session(self):
        """Create a session bound to the engine."""
        if self._session_factory is None:
            self.initialize()
        return self._session_factory()

    @contextmanager
    def session_scope(self):
        """Provide a transactional scope around a series of operations."""
        session = self.new_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self):
        """Dispose of the engine; safe to call more than once."""
        if self._engine is not None:
            self._engine.dispose()
            log.info("Database connection closed")
        self._engine = None
        self._session_factory = None

# Global database instance
db = Database()

@contextmanager
def session_scope():
    """Session scope context manager."""
    with db.session_scope() as session:
        yield session
