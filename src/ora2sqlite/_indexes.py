#!/usr/bin/python3
# -----------------------------------------------
"""
    DESCRIPTION:
        Indexes module

    ASSUMPTIONS:
        Only NORMAL indexes are copied, function based and bitmap indexes are ignored

    ACCURACY:
        An index which sqlite rejects is logged and skipped
"""
# -----------------------------------------------

import logging
import sqlite3

from ora2sqlite import o2s
from ora2sqlite._tables import quote

# -----------------------------------------------


def get_indexes(base):
    """
    Gets the normal indexes, optionally restricted by the table filter

    :param base: the base class
    :return: list of (index name, table name, unique, [columns])
    """

    table_filter = base.parameters[o2s.TABLE_FILTER]

    query = ' '.join([
        "SELECT ui.index_name, ui.table_name, ui.uniqueness, uic.column_name",
        "  FROM user_indexes ui, user_ind_columns uic",
        " WHERE ui.index_type = 'NORMAL'",
        "   AND ui.index_name = uic.index_name",
        "   AND ui.table_name = uic.table_name",
        f"  AND ui.table_name IN (SELECT table_name FROM user_tables WHERE {table_filter})" if table_filter else "",
        " ORDER BY ui.index_name, uic.column_position"
    ])

    dd, cd = base.execute_query(query)

    idx = {}
    for d in dd:
        i = idx.setdefault(d[cd['index_name']], (d[cd['table_name']], d[cd['uniqueness']] == 'UNIQUE', []))
        i[2].append(d[cd['column_name']])

    return [(index_name, *i) for index_name, i in idx.items()]


# -----------------------------------------------


def create_index_sql(index_name: str, table_name: str, unique: bool, columns):
    """ Builds the create index statement """

    return (
        f"CREATE {'UNIQUE ' if unique else ''}INDEX {quote(index_name)} "
        + f"ON {quote(table_name)} ({','.join(quote(c) for c in columns)})"
    )


# -----------------------------------------------


def etl(base, table_columns):
    """
    Creates the indexes on the copied tables

    :return: number of indexes created
    """

    base.log('Creating indices')

    created = 0

    for index_name, table_name, unique, columns in get_indexes(base):
        if table_name not in table_columns:
            continue
        missing = set(columns) - {c.source_name for c in table_columns[table_name]}
        if missing:
            base.log(
                f'  Skipping index {index_name.lower()} on {table_name.lower()}: '
                + f'columns not copied {", ".join(sorted(missing)).lower()}',
                logging.WARNING
            )
            continue
        try:
            base.execute_command(create_index_sql(index_name, table_name, unique, columns))
            created += 1
        except sqlite3.Error as e:
            base.log(f'  Skipping index {index_name.lower()} on {table_name.lower()}: {e}', logging.WARNING)

    return created


# -----------------------------------------------
# End.
