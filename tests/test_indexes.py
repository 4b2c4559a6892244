import logging

from ora2sqlite import o2s
import ora2sqlite._columns as columns
import ora2sqlite._indexes as indexes
import ora2sqlite._tables as tables

INDEX_NAMES = ['index_name', 'table_name', 'uniqueness', 'column_name']


def test_create_index_sql():
    assert indexes.create_index_sql('EMP_IX', 'EMP', False, ['A', 'B']) == 'CREATE INDEX "emp_ix" ON "emp" ("a","b")'
    assert indexes.create_index_sql('EMP_UK', 'EMP', True, ['A']) == 'CREATE UNIQUE INDEX "emp_uk" ON "emp" ("a")'


def test_get_indexes_groups_columns(base, oracle):
    oracle.add_result('user_indexes', INDEX_NAMES, [
        ('EMP_IX', 'EMP', 'NONUNIQUE', 'NAME'),
        ('EMP_IX', 'EMP', 'NONUNIQUE', 'HIRED'),
        ('EMP_UK', 'EMP', 'UNIQUE', 'ID'),
    ])

    assert indexes.get_indexes(base) == [
        ('EMP_IX', 'EMP', False, ['NAME', 'HIRED']),
        ('EMP_UK', 'EMP', True, ['ID']),
    ]
    query = oracle.queries('user_indexes')[0][0]
    assert "index_type = 'NORMAL'" in query
    assert 'user_tables' not in query


def test_get_indexes_applies_table_filter(base, oracle):
    base.set_parameter(o2s.TABLE_FILTER, "table_name = 'EMP'")

    indexes.get_indexes(base)

    query = oracle.queries('user_indexes')[0][0]
    assert "ui.table_name IN (SELECT table_name FROM user_tables WHERE table_name = 'EMP')" in query


def test_failed_index_is_skipped(base, emp, caplog):
    emp.add_result('user_indexes', INDEX_NAMES, [
        ('EMP', 'EMP', 'NONUNIQUE', 'HIRED'),
        ('EMP_BAD', 'EMP', 'NONUNIQUE', 'MISSING'),
        ('EMP_NAME', 'EMP', 'UNIQUE', 'NAME'),
        ('OTHER_IX', 'OTHER', 'NONUNIQUE', 'X'),
    ])
    table_columns = columns.etl(base)
    tables.etl(base, table_columns)

    with caplog.at_level(logging.WARNING, logger='o2s'):
        created = indexes.etl(base, table_columns)

    assert created == 1
    conn = base.get_sqlite_connection()
    names = [r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type = 'index'")]
    assert names == ['emp_name']
    assert 'Skipping index emp on emp: there is already a table named emp' in caplog.text
    assert 'Skipping index emp_bad on emp: columns not copied missing' in caplog.text
