import pytest

from agrorain.stores import open_local_backend


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'agrorain.db'}"


@pytest.fixture
def local_backend(db_url):
    return open_local_backend(db_url)
