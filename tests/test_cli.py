from types import SimpleNamespace

import pytest

from sensitive_replace import cli


@pytest.fixture(autouse=True)
def settings(monkeypatch):
    values = SimpleNamespace(
        SENSITIVE_REPLACE_PLACEHOLDER="Replace",
        SENSITIVE_REPLACE_VERBOSE=False,
        SENSITIVE_REPLACE_ENCODING="utf-8",
    )
    monkeypatch.setattr(cli, "get_settings", lambda: values)
    return values


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "source.py"
    path.write_text("MAX_SIZE = maxSize\n", encoding="utf-8")
    return path


def test_writes_result_to_stdout(source, capsys):
    exit_code = cli.main([str(source), "-m", "max_?size", "-i", "-w", "min length"])

    assert exit_code == 0
    assert capsys.readouterr().out == "MIN_LENGTH = minLength\n"
    assert source.read_text(encoding="utf-8") == "MAX_SIZE = maxSize\n"


def test_in_place(source):
    exit_code = cli.main([str(source), "-r", "11:18", "--in-place", "-w", "limit"])

    assert exit_code == 0
    assert source.read_text(encoding="utf-8") == "MAX_SIZE = limit\n"


def test_output_file_requires_force(source, tmp_path):
    target = tmp_path / "out.py"
    target.write_text("existing", encoding="utf-8")

    assert cli.main([str(source), "-r", "0:8", "-o", str(target), "-w", "x"]) == 1
    assert target.read_text(encoding="utf-8") == "existing"

    assert cli.main([str(source), "-r", "0:8", "-o", str(target), "-f", "-w", "x"]) == 0
    assert target.read_text(encoding="utf-8") == "X = maxSize\n"


def test_prompts_for_replacement(source, monkeypatch, capsys):
    prompts = []

    def fake_input(message):
        prompts.append(message)
        return "byte count"

    monkeypatch.setattr("builtins.input", fake_input)

    assert cli.main([str(source), "-m", "max_?size", "-i"]) == 0
    assert prompts == ["Replace: "]
    assert capsys.readouterr().out == "BYTE_COUNT = byteCount\n"


def test_cancelled_prompt_exits_without_editing(source, monkeypatch):
    def fake_input(message):
        raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)

    assert cli.main([str(source), "-r", "0:8", "--in-place"]) == 2
    assert source.read_text(encoding="utf-8") == "MAX_SIZE = maxSize\n"


def test_overlapping_ranges_fail(source):
    assert cli.main([str(source), "-r", "0:5", "-r", "3:8", "-w", "x"]) == 1


def test_missing_input_file(tmp_path):
    assert cli.main([str(tmp_path / "missing.txt"), "-r", "0:1", "-w", "x"]) == 1


def test_in_place_conflicts_with_output(source):
    with pytest.raises(SystemExit):
        cli.main([str(source), "--in-place", "-o", "other.txt"])


def test_output_written_when_nothing_matches(source, tmp_path, capsys):
    target = tmp_path / "out.py"

    assert cli.main([str(source), "-m", "absent", "-o", str(target), "-w", "x"]) == 0
    assert target.read_text(encoding="utf-8") == "MAX_SIZE = maxSize\n"
    assert capsys.readouterr().out == ""


def test_cancelled_prompt_creates_no_directories(source, tmp_path, monkeypatch):
    def fake_input(message):
        raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    target = tmp_path / "nested" / "out.py"

    assert cli.main([str(source), "-r", "0:8", "-o", str(target)]) == 2
    assert not target.parent.exists()


def test_output_directories_created_on_write(source, tmp_path):
    target = tmp_path / "nested" / "out.py"

    assert cli.main([str(source), "-r", "0:8", "-o", str(target), "-w", "limit"]) == 0
    assert target.read_text(encoding="utf-8") == "LIMIT = maxSize\n"
