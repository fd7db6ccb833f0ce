import pytest


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    """Point the store at an empty temporary directory for every test."""
    d = tmp_path / 'data'
    d.mkdir()
    monkeypatch.setattr('services.persistence.DATA_DIR', str(d))
    # cheapest cost bcrypt accepts
    monkeypatch.setattr('utils.passwords.BCRYPT_ROUNDS', 4)
    return d
