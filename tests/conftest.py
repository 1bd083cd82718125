import pytest

# Every tmpfile lands in the working directory, so each
# test gets a fresh, empty one.
@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path
