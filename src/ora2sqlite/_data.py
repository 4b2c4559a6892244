#!/usr/bin/python3
# -----------------------------------------------
"""
    DESCRIPTION:
        Data module, copies rows from oracle into sqlite

    ASSUMPTIONS:
        Large objects which are not being copied are selected as null, so
        they never leave the oracle server

    ACCURACY:
        LONG, LONG RAW and BFILE columns are always null
        Timestamps are truncated to milliseconds
"""
# -----------------------------------------------

import datetime
import decimal

import oracledb

from ora2sqlite import o2s
from ora2sqlite._tables import quote

# -----------------------------------------------

SQLITE_MIN_INT = -2 ** 63
SQLITE_MAX_INT = 2 ** 63 - 1

# -----------------------------------------------


def _is_null_column(column, parameters):
    """ True when the column is copied as null """

    oracle_type = column.oracle_type
    if oracle_type in o2s.NULL_TYPES:
        return True
    if oracle_type in o2s.BLOB_TYPES:
        return not parameters[o2s.BLOBS]
    if oracle_type in o2s.CLOB_TYPES:
        return not parameters[o2s.CLOBS]
    if oracle_type in o2s.XML_TYPES:
        return not parameters[o2s.XML]
    return False


# -----------------------------------------------


def select_expression(column, parameters):
    """
    Builds the select list expression for a column

    :param column: the Column
    :param parameters: the run parameters
    :return: the oracle select expression
    """

    if _is_null_column(column, parameters):
        return 'NULL'

    source = '"' + column.source_name + '"'
    if column.oracle_type in o2s.XML_TYPES:
        return f'({source}).getClobVal()'
    return source


# -----------------------------------------------


def select_sql(table_name, columns, parameters):
    """
    Builds the select statement for a table, limited by max rows

    :return: the oracle select statement
    """

    cmd = 'SELECT ' + ', '.join(select_expression(c, parameters) for c in columns) + f' FROM "{table_name}"'
    if parameters[o2s.MAX_ROWS]:
        cmd += ' WHERE ROWNUM <= :max_rows'
    return cmd


# ---


def insert_sql(table_name, columns):
    """ Builds the sqlite insert statement """

    return f"INSERT INTO {quote(table_name)} VALUES ({','.join('?' * len(columns))})"


# -----------------------------------------------


def convert_value(column, value):
    """
    Converts an oracle value to a value sqlite can bind

    :param column: the Column the value belongs to
    :param value: the fetched value
    :return: the converted value
    """

    if value is None:
        return None

    if isinstance(value, oracledb.LOB):
        value = value.read()

    if isinstance(value, datetime.datetime):
        if column.oracle_type == 'DATE':
            return value.strftime('%Y-%m-%dT%H:%M:%S')
        return value.strftime('%Y-%m-%dT%H:%M:%S.') + f'{value.microsecond // 1000:03d}Z'

    if isinstance(value, datetime.date):
        return value.strftime('%Y-%m-%dT%H:%M:%S')

    if isinstance(value, decimal.Decimal):
        value = int(value) if value == value.to_integral_value() else float(value)

    if isinstance(value, int) and not isinstance(value, bool) and not SQLITE_MIN_INT <= value <= SQLITE_MAX_INT:
        return str(value)  # Outside the sqlite 64 bit integer range

    if isinstance(value, (bool, int, float, str, bytes)):
        return value

    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)

    return str(value)


# ---


def convert_row(columns, row, parameters):
    """
    Converts a fetched row, binding null for large objects not being copied

    :param columns: list of Column
    :param row: the fetched row
    :param parameters: the run parameters
    :return: list of values to insert
    """

    return [
        None if _is_null_column(column, parameters) else convert_value(column, value)
        for column, value in zip(columns, row)
    ]


# -----------------------------------------------


def _process_data(table_name, columns, base):
    """ Copies the rows for a single table inside one transaction """

    parameters = base.parameters
    fetch_rows = parameters[o2s.FETCH_ROWS]

    conn = base.get_sqlite_connection()
    cmd = insert_sql(table_name, columns)
    row_count = 0

    cursor = base.get_oracle_connection().cursor()
    try:
        cursor.arraysize = fetch_rows
        if parameters[o2s.MAX_ROWS]:
            cursor.execute(select_sql(table_name, columns, parameters), {'max_rows': int(parameters[o2s.MAX_ROWS])})
        else:
            cursor.execute(select_sql(table_name, columns, parameters))

        conn.execute('BEGIN')
        try:
            while True:
                rows = cursor.fetchmany(fetch_rows)
                if not rows:
                    break
                conn.executemany(cmd, [convert_row(columns, row, parameters) for row in rows])
                row_count += len(rows)
        except Exception:
            conn.execute('ROLLBACK')
            raise
        conn.execute('COMMIT')
    finally:
        cursor.close()

    return row_count


# -----------------------------------------------


def etl(base, table_columns):
    """
    Copies the data for all tables
    """

    base.log('Copying data')

    table_count = len(table_columns)

    for i, (table_name, columns) in enumerate(table_columns.items(), 1):
        base.log(f'  {table_name.lower()} ({i}/{table_count})')
        row_count = _process_data(table_name, columns, base)
        base.log(f'    {row_count} rows')


# -----------------------------------------------
# End.
