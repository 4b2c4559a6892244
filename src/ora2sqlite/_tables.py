#!/usr/bin/python3
# -----------------------------------------------
"""
    DESCRIPTION:
        Tables module, builds the create table statements including keys

    ASSUMPTIONS:
        Sqlite cannot add constraints to an existing table, so primary, unique
        and foreign keys are all declared inline

    ACCURACY:
        Foreign keys to tables outside the run are dropped
"""
# -----------------------------------------------

from ora2sqlite import o2s

# -----------------------------------------------


def quote(name: str):
    """ Lower case, double quoted sqlite identifier """

    return '"' + name.lower().replace('"', '""') + '"'


# -----------------------------------------------


def _group_columns(dd, cd, column='column_name'):
    """ Groups ordered constraint rows into {constraint_name: [columns]} """

    groups = {}
    for d in dd:
        groups.setdefault(d[cd['constraint_name']], []).append(d[cd[column]])
    return groups


# -----------------------------------------------


def get_primary_key(table_name: str, base):
    """
    Gets the primary key columns in constraint order

    :param table_name: the oracle table name
    :param base: the base class
    :return: list of column names, empty if there is no primary key
    """

    query = ' '.join([
        "SELECT ucc.column_name",
        "  FROM user_constraints uc, user_cons_columns ucc",
        " WHERE uc.constraint_type = 'P'",
        "   AND uc.table_name = :table_name",
        "   AND uc.owner = ucc.owner",
        "   AND uc.constraint_name = ucc.constraint_name",
        " ORDER BY ucc.position"
    ])

    return base.execute_query_list(query, {'table_name': table_name})


# -----------------------------------------------


def get_unique_keys(table_name: str, base):
    """
    Gets the unique key constraints

    :param table_name: the oracle table name
    :param base: the base class
    :return: list of column name lists, one per constraint
    """

    query = ' '.join([
        "SELECT uc.constraint_name, ucc.column_name",
        "  FROM user_constraints uc, user_cons_columns ucc",
        " WHERE uc.constraint_type = 'U'",
        "   AND uc.table_name = :table_name",
        "   AND uc.owner = ucc.owner",
        "   AND uc.constraint_name = ucc.constraint_name",
        " ORDER BY uc.constraint_name, ucc.position"
    ])

    dd, cd = base.execute_query(query, {'table_name': table_name})

    return list(_group_columns(dd, cd).values())


# -----------------------------------------------


def get_foreign_keys(table_name: str, base):
    """
    Gets the foreign key constraints

    :param table_name: the oracle table name
    :param base: the base class
    :return: list of (columns, referenced table, referenced columns)
    """

    query = ' '.join([
        'SELECT uc.constraint_name, ruc.table_name r_table_name, ucc.column_name, rucc.column_name r_column_name',
        '  FROM user_constraints uc, user_cons_columns ucc, all_constraints ruc, all_cons_columns rucc',
        " WHERE uc.constraint_type = 'R'",
        '   AND uc.table_name = :table_name',
        '   AND uc.owner = ucc.owner',
        '   AND uc.constraint_name = ucc.constraint_name',
        '   AND uc.r_owner = ruc.owner',
        '   AND uc.r_constraint_name = ruc.constraint_name',
        '   AND ruc.owner = rucc.owner',
        '   AND ruc.constraint_name = rucc.constraint_name',
        '   AND ucc.position = rucc.position',
        ' ORDER BY uc.constraint_name, ucc.position'
    ])

    dd, cd = base.execute_query(query, {'table_name': table_name})

    fks = {}
    for con in dd:
        fk = fks.setdefault(con[cd['constraint_name']], ([], con[cd['r_table_name']], []))
        fk[0].append(con[cd['column_name']])
        fk[2].append(con[cd['r_column_name']])

    return list(fks.values())


# -----------------------------------------------


def create_table_sql(table_name: str, columns, primary_key=None, unique_keys=None, foreign_keys=None):
    """
    Builds the create table statement

    :param table_name: the table name
    :param columns: list of Column
    :param primary_key: list of column names
    :param unique_keys: list of column name lists
    :param foreign_keys: list of (columns, referenced table, referenced columns)
    :return: the sqlite create table statement
    """

    lines = []

    for column in columns:
        line = f'{quote(column.name)} {column.type}'
        if column.nullable == 'N':
            line += ' NOT NULL'
        lines.append(line)

    if primary_key:
        lines.append(f"PRIMARY KEY ({','.join(quote(c) for c in primary_key)})")

    for uk in unique_keys or []:
        lines.append(f"UNIQUE ({','.join(quote(c) for c in uk)})")

    for tcols, rtab, rcols in foreign_keys or []:
        lines.append(
            f"FOREIGN KEY ({','.join(quote(c) for c in tcols)}) "
            + f"REFERENCES {quote(rtab)} ({','.join(quote(c) for c in rcols)})"
        )

    return f'CREATE TABLE {quote(table_name)} (' + ', '.join(lines) + ')'


# -----------------------------------------------


def _process_create_table(table_name, columns, table_names, base):
    """
    Reads the keys and executes the create table statement
    """

    primary_key = get_primary_key(table_name, base) if base.parameters[o2s.PRIMARY_KEYS] else None
    unique_keys = get_unique_keys(table_name, base) if base.parameters[o2s.UNIQUE_KEYS] else None
    foreign_keys = None

    if base.parameters[o2s.FOREIGN_KEYS]:
        foreign_keys = []
        for fk in get_foreign_keys(table_name, base):
            if fk[1] in table_names:
                foreign_keys.append(fk)
            else:
                base.log(f'  Skipping foreign key on {table_name} to {fk[1]}, table not copied')

    base.execute_command(create_table_sql(table_name, columns, primary_key, unique_keys, foreign_keys))


# -----------------------------------------------


def etl(base, table_columns):
    """
    Creates the tables in sqlite
    """

    base.log('Creating tables')

    for table_name, columns in table_columns.items():
        _process_create_table(table_name, columns, table_columns, base)


# -----------------------------------------------
# End.
