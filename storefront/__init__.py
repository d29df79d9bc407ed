from .config import config
from .db import db, session_scope
from .logging_setup import logger, get_logger
from .exceptions import (
    StorefrontError, DatabaseConnectionError, AuthError, AuthorizationError,
    ValidationError, NotFoundError, OrderError
)

__all__ = [
    'config',
    'db',
    'session_scope',
    'logger',
    'get_logger',
    'StorefrontError',
    'DatabaseConnectionError',
    'AuthError',
    'AuthorizationError',
    'ValidationError',
    'NotFoundError',
    'OrderError'
]
