import argparse
import json
import os

import pytest

from e6dl import console
from e6dl.core.errors import GrabError

from conftest import FakeSender, make_post


def answers(*lines):
    it = iter(lines)
    return lambda: next(it)


@pytest.mark.parametrize("text, expected", [
    ("y", True), ("YES", True), ("  Yes \n", True),
    ("n", False), ("No", False), (" N ", False),
    ("maybe", None), ("", None), ("yess", None),
])
def test_parse_yes_no(text, expected):
    assert console.parse_yes_no(text) is expected


def test_ask_repeats_until_valid(capsys):
    assert console.ask_yes_no("Continue", answers("maybe", "", "n")) is False

    out = capsys.readouterr().out
    assert out.startswith("Continue (Y/N)?")
    assert out.count("Incorrect input!") == 2


def test_yes_enters_safe_mode():
    sender = FakeSender()
    assert console.should_enter_safe_mode(sender, answers("YES")) is True
    assert sender.safe_mode is True


def test_invalid_answer_leaves_sender_untouched():
    sender = FakeSender()
    read = answers("maybe")

    with pytest.raises(StopIteration):
        console.should_enter_safe_mode(sender, read)
    assert sender.safe_mode is False


def test_no_keeps_normal_mode():
    sender = FakeSender()
    assert console.should_enter_safe_mode(sender, answers("no")) is False
    assert sender.safe_mode is False


def test_emergency_exit_waits_then_exits(capsys):
    with pytest.raises(SystemExit) as exc_info:
        console.emergency_exit("config.json is broken", answers(""))

    assert exc_info.value.code == 1
    out = capsys.readouterr().out
    assert "config.json is broken" in out
    assert "Press ENTER" in out


def make_args(tmp_path, **overrides):
    values = {
        "config": str(tmp_path / "config.json"),
        "tags": str(tmp_path / "tags.txt"),
        "safe": False,
        "no_prompt": True,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


def test_first_run_creates_config_and_tag_template(tmp_path, capsys):
    assert console.run(make_args(tmp_path)) == 0

    assert os.path.isfile(tmp_path / "config.json")
    assert os.path.isfile(tmp_path / "tags.txt")


def test_full_run_downloads_and_saves_last_run(tmp_path, monkeypatch):
    download_dir = str(tmp_path / "dl") + "/"
    (tmp_path / "config.json").write_text(json.dumps({
        "createDirectories": True,
        "downloadDirectory": download_dir,
        "lastRun": {},
        "partUsedAsName": "id",
    }))
    (tmp_path / "tags.txt").write_text("[general]\nfox:art\n[single-post]\n9\n")

    sender = FakeSender()
    sender.pages["fox:art"] = [[make_post(1, ext="png")]]
    sender.posts[9] = make_post(9)
    monkeypatch.setattr(console, "RequestSender", lambda auth=None: sender)
    os.makedirs(download_dir)
    (tmp_path / "dl" / "keep.part").write_text("not ours")

    assert console.run(make_args(tmp_path, safe=True)) == 0

    assert sender.safe_mode is True
    assert os.path.isfile(os.path.join(download_dir, "General", "fox_art", "1.png"))
    assert os.path.isfile(os.path.join(download_dir, "Single Posts", "9.jpg"))
    assert sorted(os.listdir(download_dir)) == ["General", "Single Posts", "keep.part"]
    saved = json.loads((tmp_path / "config.json").read_text())
    assert "fox:art" in saved["lastRun"]


def test_malformed_config_triggers_emergency_exit(tmp_path, monkeypatch):
    (tmp_path / "config.json").write_text("{broken")
    monkeypatch.setattr("builtins.input", lambda *args: "")

    with pytest.raises(SystemExit):
        console.run(make_args(tmp_path))


def test_main_reports_errors_with_exit_code(monkeypatch):
    def failing_run(args):
        raise GrabError("no such pool")
    monkeypatch.setattr(console, "run", failing_run)
    monkeypatch.setattr(console, "setup_logging", lambda: None)

    assert console.main(["--no-prompt"]) == 1
