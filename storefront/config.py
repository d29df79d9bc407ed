import configparser
import os
import urllib.parse
from pathlib import Path

# Built-in settings; values in settings.ini override them key by key
DEFAULTS = {
    'DATABASE': {
        'engine': 'postgresql',
        'host': 'localhost',
        'port': '5432',
        'database': 'storefront',
        'username': 'postgres',
        'password': '',
        'echo': 'False',
        'pool_size': '5',
        'max_overflow': '5',
        'pool_timeout': '30',
        'pool_recycle': '1800',
    },
    'LOGGING': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'directory': 'logs',
        'max_size_mb': '10',
        'backup_count': '5',
        # Off so log lines don't interleave with prompts
        'console_output': 'False',
    },
    'STORE_RULES': {
        'nearby_radius': '30.0',
        'recent_limit': '5',
        'top_limit': '5',
        'min_coordinate': '0.0',
        'max_coordinate': '100.0',
    },
}

class Config:
    """Configuration manager for the Storefront client.

    Settings live in ``settings.ini`` inside the directory named by the
    ``STOREFRONT_CONFIG_DIR`` environment variable, or ``./config`` when
    it isn't set. A missing file is written out from the defaults.
    """

    _instance = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._config_dir = Path(os.environ.get('STOREFRONT_CONFIG_DIR', 'config'))
        self._config_path = self._config_dir / 'settings.ini'

        self._config = configparser.ConfigParser(interpolation=None)
        self._config.read_dict(DEFAULTS)

        if self._config_path.exists():
            self._config.read(self._config_path)
        else:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            self._save_config()

        self._initialized = True

    def _save_config(self):
        with open(self._config_path, 'w') as settings_file:
            self._config.write(settings_file)

    def _read(self, reader, section, key, default):
        try:
            return reader(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def get(self, section, key, default=None):
        """Get configuration value."""
        return self._read(self._config.get, section, key, default)

    def get_int(self, section, key, default=None):
        """Get configuration value as integer."""
        return self._read(self._config.getint, section, key, default)

    def get_float(self, section, key, default=None):
        """Get configuration value as float."""
        return self._read(self._config.getfloat, section, key, default)

    def get_boolean(self, section, key, default=None):
        """Get configuration value as boolean."""
        return self._read(self._config.getboolean, section, key, default)

    def set(self, section, key, value):
        """Set a value and persist it to the settings file."""
        if not self._config.has_section(section):
            self._config.add_section(section)

        self._config.set(section, key, str(value))
        self._save_config()

    def get_db_url(self, database=None, port=None, username=None):
        """Build the SQLAlchemy URL for the store database.

        The database name, port and user given on the command line take
        precedence over the settings file. The password only ever comes
        from the settings file and is left out of the URL when empty.

        Args:
            database: Optional database name override
            port: Optional port override
            username: Optional user name override

        Returns:
            Database URL string
        """
        db_settings = self._config['DATABASE']

        username = username or db_settings.get('username')
        port = port or db_settings.get('port')
        database = database or db_settings.get('database')
        password = urllib.parse.quote_plus(db_settings.get('password', ''))

        credentials = f"{username}:{password}" if password else username
        return f"{db_settings.get('engine')}://{credentials}@{db_settings.get('host')}:{port}/{database}"

    @property
    def pool_config(self):
        """Get connection pool configuration."""
        return {
            key: self.get_int('DATABASE', key, int(DEFAULTS['DATABASE'][key]))
            for key in ('pool_size', 'max_overflow', 'pool_timeout', 'pool_recycle')
        }

    @property
    def log_config(self):
        """Get logging configuration."""
        defaults = DEFAULTS['LOGGING']
        return {
            'level': self.get('LOGGING', 'level', defaults['level']),
            'format': self.get('LOGGING', 'format', defaults['format']),
            'directory': self.get('LOGGING', 'directory', defaults['directory']),
            'max_size_mb': self.get_int('LOGGING', 'max_size_mb', 10),
            'backup_count': self.get_int('LOGGING', 'backup_count', 5),
            'console_output': self.get_boolean('LOGGING', 'console_output', False)
        }

    @property
    def store_rules(self):
        """Radius, report limits and coordinate range used by the services."""
        return {
            'nearby_radius': self.get_float('STORE_RULES', 'nearby_radius', 30.0),
            'recent_limit': self.get_int('STORE_RULES', 'recent_limit', 5),
            'top_limit': self.get_int('STORE_RULES', 'top_limit', 5),
            'min_coordinate': self.get_float('STORE_RULES', 'min_coordinate', 0.0),
            'max_coordinate': self.get_float('STORE_RULES', 'max_coordinate', 100.0)
        }

# Global config instance
config = Config()
