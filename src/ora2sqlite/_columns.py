#!/usr/bin/python3
# -----------------------------------------------
"""
    DESCRIPTION:
        Columns module, reads the table and view columns and maps their types

    ASSUMPTIONS:
        Filters are sql predicates on user_tables and user_views

    ACCURACY:
        Precision and length are dropped, sqlite types have no size
"""
# -----------------------------------------------

import collections

from ora2sqlite import o2s

# -----------------------------------------------

Column = collections.namedtuple('Column', ['position', 'name', 'source_name', 'type', 'nullable', 'oracle_type'])

# -----------------------------------------------


def map_type(oracle_type: str, data_scale=None):
    """
    Maps an oracle data type to a sqlite type

    :param oracle_type: the data_type from user_tab_cols
    :param data_scale: the data_scale from user_tab_cols
    :return: one of o2s.SQLITE_TYPES
    """

    oracle_type = (oracle_type or '').upper()

    if oracle_type.startswith('TIMESTAMP'):
        return o2s.DATETIME
    if oracle_type == 'NUMBER' and data_scale == 0:
        return o2s.INTEGER

    return o2s.DEFAULT_ORA2SQLITE.get(oracle_type, o2s.TEXT)


# -----------------------------------------------


def _where(predicate):
    """ Optional where clause """

    return f'WHERE {predicate}' if predicate else ''


# -----------------------------------------------


def _process_columns(base):
    """
    Reads the columns of every table and view included in the run
    """

    table_filter = base.parameters[o2s.TABLE_FILTER]
    view_filter = base.parameters[o2s.VIEW_FILTER] if base.parameters[o2s.VIEWS] else '1=2'

    query = ' '.join([
        "SELECT utc.table_name, utc.column_name, utc.data_type, utc.data_scale, utc.nullable",
        "  FROM user_tab_cols utc",
        " WHERE utc.hidden_column = 'NO'",
        f"  AND (utc.table_name IN (SELECT table_name FROM user_tables {_where(table_filter)})",
        f"       OR utc.table_name IN (SELECT view_name FROM user_views {_where(view_filter)}))",
        " ORDER BY utc.table_name, utc.column_id"
    ])

    dd, cd = base.execute_query(query)

    table_columns = {}

    for d in dd:
        table_name = d[cd['table_name']]
        cols = table_columns.setdefault(table_name, [])
        cols.append(Column(
            position=len(cols) + 1,
            name=d[cd['column_name']].lower(),
            source_name=d[cd['column_name']],
            type=map_type(d[cd['data_type']], d[cd['data_scale']]),
            nullable=d[cd['nullable']],
            oracle_type=d[cd['data_type']]
        ))

    return table_columns


# -----------------------------------------------


def etl(base):
    """
    Reads the columns for all tables in the run

    :return: dict of oracle table name to list of Column
    """

    base.log('Reading tables')

    table_columns = _process_columns(base)

    base.log(f'Found {len(table_columns)} tables')

    return table_columns


# -----------------------------------------------
# End.
