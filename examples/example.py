import ora2sqlite as o2s

# -----------------------------------------------

MY_PATH = 'C:/Temp/o2s/'

# -----------------------------------------------


def go():
    """ Go go go """

    parameters = {
        o2s.ORACLE_INSTANT_CLIENT: "C:/oracle/instantclient_19_3",
        o2s.ORACLE_DSN: "localhost:1521/orclpdb1",
        o2s.ORACLE_USER: "hr",
        o2s.ORACLE_PASSWORD: "hr",
        o2s.SQLITE_FILE: f'{MY_PATH}/hr.db',
        o2s.LOG_FILE: f'{MY_PATH}/o2s.log',
        o2s.CONSOLE: True,
        o2s.VIEWS: True,
        o2s.VIEW_FILTER: "view_name LIKE 'EMP%'",
        o2s.TABLE_FILTER: "table_name NOT LIKE 'TMP%'",
        o2s.CLOBS: True,
        o2s.MAX_ROWS: 1000
    }

    x = o2s.MANAGER(**parameters)
    x.set_parameters(**{o2s.PRIMARY_KEYS: True, o2s.FOREIGN_KEYS: True, o2s.INDEXES: True})

    table_columns = x.do_etl()

    for table_name, columns in table_columns.items():
        print(table_name.lower(), ', '.join(f'{c.name} {c.type}' for c in columns))


go()
