import pytest

from ora2sqlite import o2s
import ora2sqlite._columns as columns

from conftest import COLUMN_NAMES


@pytest.mark.parametrize('oracle_type, data_scale, expected', [
    ('TIMESTAMP(6)', None, 'DATETIME'),
    ('TIMESTAMP(6) WITH TIME ZONE', None, 'DATETIME'),
    ('TIMESTAMP(3) WITH LOCAL TIME ZONE', None, 'DATETIME'),
    ('DATE', None, 'DATETIME'),
    ('NUMBER', 0, 'INTEGER'),
    ('NUMBER', 2, 'REAL'),
    ('NUMBER', None, 'REAL'),
    ('FLOAT', None, 'REAL'),
    ('CHAR', None, 'TEXT'),
    ('NCHAR', None, 'TEXT'),
    ('VARCHAR2', None, 'TEXT'),
    ('NVARCHAR2', None, 'TEXT'),
    ('RAW', None, 'BLOB'),
    ('BLOB', None, 'BLOB'),
    ('CLOB', None, 'TEXT'),
    ('LONG', None, 'TEXT'),
    ('XMLTYPE', None, 'TEXT'),
    ('ROWID', None, 'TEXT'),
    ('INTERVAL DAY(2) TO SECOND(6)', None, 'TEXT'),
    ('BFILE', None, 'TEXT'),
])
def test_map_type(oracle_type, data_scale, expected):
    assert columns.map_type(oracle_type, data_scale) == expected


def test_map_type_only_uses_sqlite_vocabulary():
    for oracle_type in o2s.DEFAULT_ORA2SQLITE:
        assert columns.map_type(oracle_type, None) in o2s.SQLITE_TYPES


def test_columns_are_grouped_by_table_in_order(base, emp):
    emp.results.insert(0, ('user_tab_cols', COLUMN_NAMES, [
        ('DEPT', 'DEPTNO', 'NUMBER', 0, 'N'),
        ('DEPT', 'DNAME', 'VARCHAR2', None, 'Y'),
        ('EMP', 'ID', 'NUMBER', 0, 'N'),
    ], None))

    table_columns = columns.etl(base)

    assert list(table_columns) == ['DEPT', 'EMP']
    deptno, dname = table_columns['DEPT']
    assert deptno == columns.Column(1, 'deptno', 'DEPTNO', 'INTEGER', 'N', 'NUMBER')
    assert dname.position == 2
    assert dname.type == 'TEXT'
    assert table_columns['EMP'][0].position == 1


def test_views_are_excluded_by_default(base, emp):
    columns.etl(base)

    query = emp.queries('user_tab_cols')[0][0]
    assert "hidden_column = 'NO'" in query
    assert 'FROM user_views WHERE 1=2' in query


def test_filters_are_applied(base, emp):
    base.set_parameters(**{
        o2s.VIEWS: True,
        o2s.VIEW_FILTER: "view_name LIKE 'V%'",
        o2s.TABLE_FILTER: "table_name IN ('EMP')",
    })

    columns.etl(base)

    query = emp.queries('user_tab_cols')[0][0]
    assert "FROM user_tables WHERE table_name IN ('EMP')" in query
    assert "FROM user_views WHERE view_name LIKE 'V%'" in query


def test_views_without_filter_are_all_selected(base, emp):
    base.set_parameter(o2s.VIEWS, True)

    columns.etl(base)

    query = emp.queries('user_tab_cols')[0][0]
    assert 'FROM user_views )' in query
    assert '1=2' not in query
