import logging
import logging.handlers
from pathlib import Path

from storefront.config import config

ROOT_NAME = 'storefront'

class Logger:
    """Logging manager for the Storefront client.

    Every component logs under the ``storefront`` namespace. Records end up
    in one rotating ``storefront.log`` and errors are also copied to
    ``errors.log``. The terminal belongs to the menus, so console output
    only appears when it's switched on in the settings file.
    """

    _instance = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Logger, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._log_config = config.log_config
        self._log_dir = Path(self._log_config['directory'])
        self._log_dir.mkdir(parents=True, exist_ok=True)

        self._root = logging.getLogger(ROOT_NAME)
        self._configure_handlers()
        self._app_logger = self.get_logger('app')

        self._initialized = True

    def _rotating_handler(self, filename, level=logging.NOTSET):
        handler = logging.handlers.RotatingFileHandler(
            self._log_dir / filename,
            maxBytes=self._log_config['max_size_mb'] * 1024 * 1024,
            backupCount=self._log_config['backup_count'],
            encoding='utf-8'
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(self._log_config['format']))
        return handler

    def _configure_handlers(self):
        level_name = self._log_config['level'].upper()
        self._root.setLevel(getattr(logging, level_name, logging.INFO))

        for handler in self._root.handlers[:]:
            self._root.removeHandler(handler)
            handler.close()

        self._root.addHandler(self._rotating_handler('storefront.log'))
        self._root.addHandler(self._rotating_handler('errors.log', logging.ERROR))

        if self._log_config['console_output']:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.WARNING)
            console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
            self._root.addHandler(console_handler)

        # Keep client records out of whatever the root logger prints
        self._root.propagate = False

    def get_logger(self, name):
        """Get a component logger, e.g. ``orders`` -> ``storefront.orders``.

        Args:
            name: Component name

        Returns:
            Logger that writes through the shared Storefront handlers
        """
        if name == ROOT_NAME or name.startswith(ROOT_NAME + '.'):
            return logging.getLogger(name)
        return self._root.getChild(name)

    def log_exception(self, logger_name, exception, message=None):
        """Log an exception together with its traceback.

        Args:
            logger_name: Component name
            exception: Exception object
            message: Optional message to include
        """
        text = f"{message}: {str(exception)}" if message else str(exception)
        self.get_logger(logger_name).error(text, exc_info=exception)

    @property
    def app_logger(self):
        """Get the application logger."""
        return self._app_logger

# Global logger instance
logger = Logger()

def get_logger(name):
    """Get a logger with the specified name."""
    return logger.get_logger(name)

def log_exception(logger_name, exception, message=None):
    """Log an exception with stack trace."""
    logger.log_exception(logger_name, exception, message)
