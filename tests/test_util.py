import pytest

from hcc.errors import HccError
from hcc.util import read_file, replace_first


def test_read_file_round_trip(tmp_path):
    path = tmp_path / "prog.c"
    content = "int main() {return 0;}\nsecond line\n"
    path.write_text(content, encoding="utf-8")
    assert read_file(str(path)) == content


def test_read_file_missing(tmp_path):
    missing = str(tmp_path / "missing.c")
    with pytest.raises(HccError) as info:
        read_file(missing)
    assert str(info.value) == f"could not open {missing}"


def test_replace_first_only_first():
    result = replace_first("a-a-a", "a", "b")
    assert result.count("b") == 1
    assert result.startswith("b")
    assert result.endswith("-a-a")


def test_replace_first_absent_leaves_text():
    assert replace_first("hello", "z", "y") == "hello"