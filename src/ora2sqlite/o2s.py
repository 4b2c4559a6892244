#!/usr/bin/python3
# -----------------------------------------------
"""
    DESCRIPTION:
        Constants for use in the package

    ASSUMPTIONS:
        Parameters are held in a plain dict keyed by the names below

    LIMITATIONS:
        The sqlite type vocabulary is fixed to the five types in SQLITE_TYPES
"""
# -----------------------------------------------
#  Parameters

BLOBS = 'blobs'
CLOBS = 'clobs'
CONSOLE = 'console'
ENCODING = 'encoding'
FETCH_ROWS = 'fetch_rows'
FOREIGN_KEYS = 'foreign_keys'
INDEXES = 'indexes'
LOG_FILE = 'log_file'
MAX_ROWS = 'max_rows'
ORACLE_DSN = 'oracle_dsn'
ORACLE_INSTANT_CLIENT = 'oracle_instant_client'
ORACLE_PASSWORD = 'oracle_password'
ORACLE_USER = 'oracle_user'
PRIMARY_KEYS = 'primary_keys'
SQLITE_FILE = 'sqlite_file'
TABLE_FILTER = 'table_filter'
UNIQUE_KEYS = 'unique_keys'
VIEW_FILTER = 'view_filter'
VIEWS = 'views'
XML = 'xml'

REQUIRED_PARAMETERS = [ORACLE_DSN, ORACLE_USER, ORACLE_PASSWORD]

# ---

DEFAULT_PARAMETERS = {
    BLOBS: False,
    CLOBS: False,
    CONSOLE: False,
    ENCODING: 'utf-8-sig',
    FETCH_ROWS: 2500,
    FOREIGN_KEYS: False,
    INDEXES: False,
    LOG_FILE: None,
    MAX_ROWS: None,
    ORACLE_INSTANT_CLIENT: None,
    PRIMARY_KEYS: False,
    SQLITE_FILE: None,
    TABLE_FILTER: None,
    UNIQUE_KEYS: False,
    VIEW_FILTER: None,
    VIEWS: False,
    XML: False
}

# ---
#  sqlite types

INTEGER = 'INTEGER'
REAL = 'REAL'
TEXT = 'TEXT'
BLOB = 'BLOB'
DATETIME = 'DATETIME'

SQLITE_TYPES = (INTEGER, REAL, TEXT, BLOB, DATETIME)

# ---
#  oracle to sqlite type map, NUMBER and TIMESTAMP% are resolved in _columns.map_type

DEFAULT_ORA2SQLITE = {
    'DATE': DATETIME,
    'FLOAT': REAL,
    'NUMBER': REAL,
    'CHAR': TEXT,
    'NCHAR': TEXT,
    'VARCHAR2': TEXT,
    'NVARCHAR2': TEXT,
    'RAW': BLOB,
    'BLOB': BLOB,
    'CLOB': TEXT,
    'LONG': TEXT,
    'XMLTYPE': TEXT
}

# ---
#  oracle types with special handling when copying rows

BLOB_TYPES = ('BLOB', 'RAW')
CLOB_TYPES = ('CLOB', 'NCLOB')
XML_TYPES = ('XMLTYPE',)
NULL_TYPES = ('LONG', 'LONG RAW', 'BFILE')  # Cannot be retrieved, always null

# -----------------------------------------------
# End.
