"""Shared test fixtures."""

import pytest


@pytest.fixture
def user_doc():
    return {
        "user": {
            "id": 1,
            "internal": {"created": "2024-01-01", "modified": "2024-01-02"},
            "roles": [
                {"id": 1, "internal": True},
                {"id": 2, "internal": False},
            ],
        }
    }


@pytest.fixture
def merge_source():
    return {
        "config": {
            "timeout": 30,
            "endpoints": ["api1", "api2"],
            "database": {"port": 5432},
        }
    }


@pytest.fixture
def merge_other():
    return {
        "config": {
            "timeout": 60,
            "endpoints": ["api3", "api1"],
            "database": {"host": "localhost"},
        }
    }


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "wwwroot" / "appconfigs.jsonc"
    path.parent.mkdir()
    path.write_text(
        """{
  // application identity
  "app": {
    "name": "demo",
    "features": ["a", "b"],
  },
  /* connection settings */
  "db": {"host": "localhost", "port": 5432}
}
""",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def messages_file(tmp_path):
    path = tmp_path / "messages.json"
    path.write_text(
        """{
  "en": {"greeting": "Hello", "errors": {"not_found": "Not found"}},
  "id": {"greeting": "Halo"}
}
""",
        encoding="utf-8",
    )
    return path
