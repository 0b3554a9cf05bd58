import re
from datetime import datetime, timedelta

from tlsrelay.errlog import log_error

NAME_RE = re.compile(r"^(\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2})-(\d{9})$")


def test_writes_message_to_file(tmp_path):
    folder = tmp_path / "errors"
    path = log_error(str(folder), "something broke")
    assert path.parent == folder
    assert path.read_text(encoding="utf-8") == "something broke\n"


def test_creates_nested_folder(tmp_path):
    folder = tmp_path / "a" / "b" / "c"
    path = log_error(str(folder), "x")
    assert folder.is_dir()
    assert list(folder.iterdir()) == [path]


def test_file_name_format(tmp_path):
    before = datetime.now().replace(microsecond=0)
    path = log_error(str(tmp_path), "msg")
    after = datetime.now()

    match = NAME_RE.match(path.name)
    assert bool(match) is True
    stamp, fraction = match.groups()
    parsed = datetime.strptime(stamp, "%Y-%m-%d_%H-%M-%S")
    assert before - timedelta(seconds=1) <= parsed <= after
    assert len(fraction) == 9
    assert fraction.isdigit() is True


def test_prints_to_stderr(tmp_path, capsys):
    log_error(str(tmp_path), "bad thing")
    assert "ERROR: bad thing" in capsys.readouterr().err


def test_folder_is_a_file_reports_failure(tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    result = log_error(str(blocker / "sub"), "msg")
    assert result is None
    assert "could not create error folder" in capsys.readouterr().err