"""
The extract transform load manager module for migrating an oracle schema to sqlite
"""
# -----------------------------------------------

import logging
import os
import sqlite3
import time

import oracledb

from ora2sqlite import o2s
import ora2sqlite._columns as columns
import ora2sqlite._data as data
import ora2sqlite._indexes as indexes
import ora2sqlite._tables as tables

# -----------------------------------------------


class BASE:
    """ Manage connections and parameters """

    def __init__(self, **kwargs):
        """
        Initialise the base class
        """

        self.conn_ora = None
        self.conn_sqlite = None
        self.parameters = o2s.DEFAULT_PARAMETERS.copy()
        self.set_parameters(**kwargs)

        self.logger = logging.getLogger('o2s')
        self.logger.setLevel(logging.INFO)
        self.log_handler = None

        if self.parameters[o2s.LOG_FILE]:
            self.log_handler = logging.FileHandler(self.parameters[o2s.LOG_FILE])
            self.log_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(message)s'))
            self.logger.addHandler(self.log_handler)

    # -------------------------------------------

    def get_parameter(self, name: str):
        """
        Get a named parameter value

        :param name: the name of the parameter
        :return: the parameter value if it exists or None
        """

        return self.parameters.get(name)

    # ---

    def set_parameter(self, name: str, value):
        """
        Sets a single parameter with the specified value

        :param name: the name of the parameter
        :param value: the value of the parameter
        """

        self.parameters[name] = value

    # ---

    def set_parameters(self, **kwargs):
        """
        Sets multiple parameters with the specified values

        :param kwargs: the names and values of the parameters
        """

        if kwargs:
            self.parameters.update(**kwargs)

    # ---

    def validate_parameters(self):
        """
        Checks the required parameters are set and fills in the sqlite file name

        :raises ValueError: when a required parameter is missing
        """

        missing = [i for i in o2s.REQUIRED_PARAMETERS if not self.parameters.get(i)]
        if missing:
            raise ValueError(f'Parameters not set: {", ".join(missing)}')

        if not self.parameters[o2s.SQLITE_FILE]:
            self.parameters[o2s.SQLITE_FILE] = f'{self.parameters[o2s.ORACLE_USER]}.db'

        max_rows = self.parameters[o2s.MAX_ROWS]
        if max_rows is not None and int(max_rows) < 1:
            raise ValueError(f'"{o2s.MAX_ROWS}" must be a positive number: {max_rows}')

    # -------------------------------------------

    def get_oracle_connection(self):
        """
        Gets the oracledb connection object

        :return: oracle connection object
        """

        if not self.conn_ora:
            self.validate_parameters()

            if self.parameters[o2s.ORACLE_INSTANT_CLIENT]:
                oracledb.init_oracle_client(lib_dir=self.parameters[o2s.ORACLE_INSTANT_CLIENT])

            self.conn_ora = oracledb.connect(
                user=self.parameters[o2s.ORACLE_USER],
                password=self.parameters[o2s.ORACLE_PASSWORD],
                dsn=self.parameters[o2s.ORACLE_DSN]
            )
            self.conn_ora.outputtypehandler = output_type_handler

        return self.conn_ora

    # -------------------------------------------

    def get_sqlite_connection(self):
        """
        Gets the sqlite3 connection object, removing any existing file first

        :return: sqlite3 connection object
        """

        if not self.conn_sqlite:
            self.validate_parameters()

            sqlite_file = self.parameters[o2s.SQLITE_FILE]
            if os.path.exists(sqlite_file):
                os.remove(sqlite_file)

            self.conn_sqlite = sqlite3.connect(sqlite_file, isolation_level=None)

        return self.conn_sqlite

    # -------------------------------------------

    def execute_command(self, cmd: str, params=None):
        """
        Execute a command on sqlite

        :param cmd: the command string
        :param params: optional bind values
        """

        conn = self.get_sqlite_connection()
        conn.execute(cmd, params or ())

    # -------------------------------------------

    def execute_query(self, query: str, params=None):
        """
        Executes a query on the oracle database

        :param query: the query string
        :param params: optional dict of bind values
        :return: tuple of dd, list of rows, and cd, column name to position
        """

        conn = self.get_oracle_connection()
        cursor = conn.cursor()
        cursor.execute(query, params or {})
        cd = {c[0].lower(): i for i, c in enumerate(list(cursor.description))}
        dd = list(cursor.fetchall())
        cursor.close()

        return dd, cd

    # -------------------------------------------

    def execute_query_list(self, query: str, params=None):
        """
        Executes a query on the oracle database, returning the first column only

        :param query: the query string
        :param params: optional dict of bind values
        :return: list of first column values
        """

        return [i[0] for i in self.execute_query(query, params)[0]]

    # -------------------------------------------

    def log(self, line, level=logging.INFO):
        """
        Logs a line, echoing to the console when requested

        :param line: the message
        :param level: the logging level
        """

        self.logger.log(level, line)
        if self.parameters.get(o2s.CONSOLE):
            print(line)

    # -------------------------------------------

    def close(self):
        """
        Closes both connections and the log file
        """

        if self.conn_sqlite:
            self.conn_sqlite.close()
            self.conn_sqlite = None
        if self.conn_ora:
            self.conn_ora.close()
            self.conn_ora = None
        if self.log_handler:
            self.logger.removeHandler(self.log_handler)
            self.log_handler.close()
            self.log_handler = None


# -----------------------------------------------


class MANAGER(BASE):
    """ The manager class, including all base modules and the run option, do_etl """

    def do_etl(self):
        """ Runs the migration """
        return do_etl(self)


# -----------------------------------------------


def do_etl(base: BASE):
    """
    Runs the ETL functions, tables, data then indexes

    :param base: the base class containing connections and parameters
    :return: the table name to columns dict
    """

    start = time.time()

    try:
        base.validate_parameters()

        # ---
        #  Connections

        base.get_oracle_connection()
        base.get_sqlite_connection()

        # ---

        table_columns = columns.etl(base)

        tables.etl(base, table_columns)
        data.etl(base, table_columns)

        if base.parameters[o2s.INDEXES]:
            indexes.etl(base, table_columns)

    except Exception as e:
        base.log(f'Migration failed: {e}', logging.ERROR)
        raise

    finally:
        base.log(f'Executed in {int(time.time() - start)}s')
        base.close()

    return table_columns


# -----------------------------------------------


def output_type_handler(cursor, metadata):
    """ Fetches LOBs as values rather than locators. Signature is specified by oracledb """

    if metadata.type_code is oracledb.DB_TYPE_CLOB:
        return cursor.var(oracledb.DB_TYPE_LONG, arraysize=cursor.arraysize)
    if metadata.type_code is oracledb.DB_TYPE_NCLOB:
        return cursor.var(oracledb.DB_TYPE_LONG_NVARCHAR, arraysize=cursor.arraysize)
    if metadata.type_code is oracledb.DB_TYPE_BLOB:
        return cursor.var(oracledb.DB_TYPE_LONG_RAW, arraysize=cursor.arraysize)


# -----------------------------------------------
# End.
