import json
import sys, pathlib
from types import SimpleNamespace

import pytest
from postgrest.exceptions import APIError

# Ensure project src directory is on path for tests
PROJECT_ROOT = pathlib.Path(__file__).parent.parent
SRC = PROJECT_ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


# JSON body PostgREST sends with an HTTP 409 for a unique violation
UNIQUE_VIOLATION = {
    "code": "23505",
    "message": "duplicate key value violates unique constraint \"pcpartpicker_prices_category_name_key\"",
    "details": "Key (category, name)=(gpu, Part 0) already exists.",
    "hint": None,
}

# What the client builds when the error body is not JSON (e.g. a proxy error page)
BAD_GATEWAY = {
    "message": "JSON could not be generated",
    "code": 502,
    "hint": "Refer to full message for details",
    "details": "b'<html>502 Bad Gateway</html>'",
}


def make_items(count, price=100.0, prefix="Part"):
    return [{"name": f"{prefix} {i}", "price": price} for i in range(count)]


class FakeUpsert:
    def __init__(self, client, table, rows, options):
        self.client = client
        self.table = table
        self.rows = rows
        self.options = options

    def execute(self):
        self.client.calls.append(
            {"table": self.table, "rows": self.rows, "options": self.options}
        )
        if self.client.fail_on_call == len(self.client.calls):
            raise APIError(self.client.error)
        return SimpleNamespace(data=[])


class FakeTable:
    def __init__(self, client, name):
        self.client = client
        self.name = name

    def upsert(self, rows, **options):
        return FakeUpsert(self.client, self.name, rows, options)


class FakeSupabase:
    """Records upsert calls; fails on the n-th call when fail_on_call is set."""

    def __init__(self, fail_on_call=None, error=None):
        self.calls = []
        self.fail_on_call = fail_on_call
        self.error = error or dict(UNIQUE_VIOLATION)

    def table(self, name):
        return FakeTable(self, name)


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def data_dir(tmp_path):
    d = tmp_path / "json"
    d.mkdir()
    return d


@pytest.fixture
def write_category(data_dir):
    def _write(filename, payload):
        path = data_dir / filename
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def full_dataset(write_category):
    """Every category at exactly its minimum size, all prices sane."""
    from partsync.config import CATEGORIES

    for key, config in CATEGORIES.items():
        write_category(config.source_file, make_items(config.min_items, prefix=key))
