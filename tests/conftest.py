import datetime

import pytest

from ora2sqlite import o2s
from ora2sqlite.mgr import BASE

# -----------------------------------------------

COLUMN_NAMES = ['table_name', 'column_name', 'data_type', 'data_scale', 'nullable']

EMP_COLUMNS = [
    ('EMP', 'ID', 'NUMBER', 0, 'N'),
    ('EMP', 'NAME', 'VARCHAR2', None, 'Y'),
    ('EMP', 'PHOTO', 'BLOB', None, 'Y'),
    ('EMP', 'NOTES', 'CLOB', None, 'Y'),
    ('EMP', 'HIRED', 'DATE', None, 'Y'),
    ('EMP', 'DOC', 'XMLTYPE', None, 'Y'),
    ('EMP', 'OLD', 'LONG', None, 'Y'),
]

EMP_ROWS = [
    (1, 'Smith', b'\x00\x01', 'some notes', datetime.datetime(2020, 1, 2, 3, 4, 5), '<a/>', 'old'),
    (2, 'Jones', None, None, None, None, None),
]

# -----------------------------------------------


class FakeCursor:
    """ Minimal stand in for an oracledb cursor """

    def __init__(self, conn):
        self.conn = conn
        self.arraysize = 100
        self.description = None
        self.rows = []
        self.closed = False

    def execute(self, query, params=None):
        self.conn.executed.append((query, params))
        names, rows = self.conn.result_for(query, params)
        self.description = [(n.upper(), None) for n in names]
        self.rows = list(rows)

    def fetchall(self):
        rows, self.rows = self.rows, []
        return rows

    def fetchmany(self, size):
        rows, self.rows = self.rows[:size], self.rows[size:]
        return rows

    def close(self):
        self.closed = True


class FakeOracle:
    """ Returns canned results for queries containing a marker """

    def __init__(self):
        self.results = []
        self.executed = []
        self.cursors = []
        self.closed = False

    def add_result(self, marker, names, rows, params=None):
        self.results.append((marker, names, rows, params))

    def add_error(self, marker, error):
        self.results.append((marker, error, None, None))

    def result_for(self, query, params=None):
        for marker, names, rows, match in self.results:
            if marker in query and (match is None or match == params):
                if isinstance(names, Exception):
                    raise names
                return names, rows
        return [], []

    def queries(self, marker):
        return [q for q in self.executed if marker in q[0]]

    def cursor(self):
        self.cursors.append(FakeCursor(self))
        return self.cursors[-1]

    def close(self):
        self.closed = True


class FakeBase(BASE):
    """ BASE with the oracle connection replaced """

    def __init__(self, oracle, **kwargs):
        super().__init__(**kwargs)
        self.oracle = oracle

    def get_oracle_connection(self):
        self.conn_ora = self.oracle
        return self.conn_ora


# -----------------------------------------------


@pytest.fixture
def oracle():
    return FakeOracle()


@pytest.fixture
def emp(oracle):
    oracle.add_result('user_tab_cols', COLUMN_NAMES, EMP_COLUMNS)
    oracle.add_result('FROM "EMP"', [c[1] for c in EMP_COLUMNS], EMP_ROWS)
    return oracle


@pytest.fixture
def connection_parameters(tmp_path):
    return {
        o2s.ORACLE_DSN: 'server:1521/service',
        o2s.ORACLE_USER: 'scott',
        o2s.ORACLE_PASSWORD: 'tiger',
        o2s.SQLITE_FILE: str(tmp_path / 'scott.db'),
    }


@pytest.fixture
def base(oracle, connection_parameters):
    b = FakeBase(oracle, **connection_parameters)
    yield b
    b.close()


@pytest.fixture
def patched_oracle(monkeypatch, oracle):
    """ Every BASE connects to the fake oracle """

    def get_oracle_connection(self):
        self.conn_ora = oracle
        return self.conn_ora

    monkeypatch.setattr(BASE, 'get_oracle_connection', get_oracle_connection)
    return oracle
