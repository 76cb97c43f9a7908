from types import SimpleNamespace

import polars as pl
import pytest
import sqlalchemy as sa


@pytest.fixture()
def heroes_df():
    return pl.from_records([
        {'id': 1, 'name': 'Väinämöinen', 'power': 100},
        {'id': 2, 'name': 'Joukahainen', 'power': 50},
        {'id': 3, 'name': 'Ilmarinen', 'power': 80},
        {'id': 4, 'name': 'Lemminkäinen', 'power': 70},
    ])


@pytest.fixture()
def sqlite_engine():
    eng = sa.create_engine('sqlite:///:memory:')
    meta = sa.MetaData()

    sa.Table(
        'heroes', meta,
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String),
        sa.Column('power', sa.Integer),
    )

    meta.create_all(eng)
    yield eng


class RecordingExecutor:
    """Executor double that records calls and can fail on a given batch."""

    def __init__(self, fail_prepare_at: int | None = None, fail_execute_at: int | None = None):
        self.fail_prepare_at = fail_prepare_at
        self.fail_execute_at = fail_execute_at
        self.prepared: list[str] = []
        self.executed: list[tuple[str, list]] = []

    def prepare(self, text):
        if self.fail_prepare_at == len(self.prepared):
            raise RuntimeError('syntax error near VALUES')
        self.prepared.append(text)
        return text

    def execute(self, statement, values):
        if self.fail_execute_at == len(self.executed):
            raise RuntimeError('duplicate entry')
        self.executed.append((statement, list(values)))
        return len(values)


@pytest.fixture()
def recorder():
    return RecordingExecutor()


@pytest.fixture()
def failing_executor():
    def _make(**kwargs):
        return RecordingExecutor(**kwargs)
    return _make


class FakeCursor:

    def __init__(self, log: list):
        self._log = log
        self.rowcount = -1
        self.closed = False

    def execute(self, sql, params):
        self._log.append((sql, params))
        self.rowcount = 1

    def close(self):
        self.closed = True


class FakeConnection:
    """Stands in for a sqlalchemy Connection to a server the tests do not run."""

    def __init__(self, name: str, driver: str, paramstyle: str):
        self.dialect = SimpleNamespace(name=name, driver=driver, paramstyle=paramstyle)
        self.executed: list[tuple[str, tuple]] = []
        self.begun = 0
        self.connection = SimpleNamespace(cursor=lambda: FakeCursor(self.executed))

    def in_transaction(self):
        return self.begun > 0

    def begin(self):
        self.begun += 1


@pytest.fixture()
def fake_connection():
    def _make(name='mysql', driver='pymysql', paramstyle='pyformat'):
        return FakeConnection(name, driver, paramstyle)
    return _make
