from scopedtmp import tmpfile, jlog, set_log, get_log
import json
import os
import pytest

def records(fname):
    with open(fname) as fd:
        return [json.loads(line) for line in fd]

def test_log_records(tmp_path):
    fname = str(tmp_path / "log.jtxt")
    log = jlog(fname)
    log.log(msg="hello", data=b"bytes", items=(1, 2), exc=KeyError("k"))
    log.close()
    log.log(msg="dropped")
    recs = records(fname)
    assert len(recs) == 1
    r = recs[0]
    assert r["msg"] == "hello"
    assert r["data"] == "bytes"
    assert r["items"] == [1, 2]
    assert r["exc"] == repr(KeyError("k"))
    assert r["pid"] == os.getpid()
    assert "time" in r

def test_default_log(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    log = jlog.default()
    try:
        assert log.fname == os.path.join(str(tmp_path), ".scopedtmp-logs", f"log-{os.getpid()}.jtxt")
        assert os.path.exists(log.fname)
    finally:
        log.close()

def test_lifecycle_logged(tmp_path):
    fname = str(tmp_path / "life.jtxt")
    log = jlog(fname)
    with tmpfile("logged.txt", log=log) as t:
        path = t.path
    log.close()
    recs = records(fname)
    assert [r["create"] for r in recs if "create" in r] == [path]
    assert [r["close"] for r in recs if "close" in r] == [path]

def test_installed_log(tmp_path):
    fname = str(tmp_path / "installed.jtxt")
    log = jlog(fname)
    assert get_log() is None
    set_log(log)
    try:
        with tmpfile("installed.txt") as t:
            assert t.jl is log
    finally:
        set_log(None)
        log.close()
    assert len(records(fname)) == 2

def test_cleanup_failure_swallowed(tmp_path, monkeypatch, capsys):
    fname = str(tmp_path / "fail.jtxt")
    log = jlog(fname)
    def unlink(path):
        raise PermissionError(13, "Permission denied", path)
    real_unlink = os.unlink
    monkeypatch.setattr(tmpfile, "verbose", True)
    t = tmpfile("stuck.txt", log=log)
    path = t.path
    monkeypatch.setattr(os, "unlink", unlink)
    t.close()
    log.close()
    assert t.closed
    assert os.path.exists(path)
    failures = [r for r in records(fname) if "remove" in r]
    assert len(failures) == 2
    assert "PermissionError" in failures[0]["exc"]
    assert "could not remove" in capsys.readouterr().err
    real_unlink(path)

def test_create_failure_logged(tmp_path):
    fname = str(tmp_path / "create.jtxt")
    log = jlog(fname)
    with pytest.raises(OSError):
        tmpfile("no/such/dir.txt", log=log)
    log.close()
    recs = records(fname)
    assert len(recs) == 1
    assert "FileNotFoundError" in recs[0]["exc"]

def test_verbose_by_dotted_path(monkeypatch, capsys):
    import scopedtmp.tmpfile as tm
    def unlink(path):
        raise PermissionError(13, "Permission denied", path)
    real_unlink = os.unlink
    monkeypatch.setattr(tm, "verbose", True)
    t = tmpfile("loud.txt")
    path = t.path
    assert t.verbose
    monkeypatch.setattr(os, "unlink", unlink)
    t.close()
    assert "could not remove" in capsys.readouterr().err
    real_unlink(path)

def test_verbose_per_instance(monkeypatch, capsys):
    def unlink(path):
        raise PermissionError(13, "Permission denied", path)
    real_unlink = os.unlink
    quiet = tmpfile("quiet.txt")
    loud = tmpfile("loud.txt")
    loud.verbose = True
    monkeypatch.setattr(os, "unlink", unlink)
    quiet.close()
    assert capsys.readouterr().err == ""
    loud.close()
    assert "could not remove" in capsys.readouterr().err
    real_unlink(quiet.path)
    real_unlink(loud.path)
