import subprocess
from unittest.mock import patch

import pytest

from rtfm.man_db import (
    ManDb,
    ManDbError,
    load_man_page,
    load_tldr_page,
    parse_man_index,
)

INDEX = (
    "ls (1)               - list directory contents\n"
    "printf (3)           - formatted output conversion\n"
    "cat (1)              - concatenate files and print on the standard output\n"
    "no separator here (1)\n"
    "cat (1)              - second description\n"
    "fstab (5)            - static information about the filesystems\n"
    "awk (1p)             - pattern scanning\n"
)


def _completed(args, returncode=0, stdout=b""):
    return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr=b"")


def test_parse_filters_by_section_and_sorts():
    commands, descriptions = parse_man_index(INDEX, 1)
    assert commands == ["cat", "ls"]
    assert descriptions["ls"] == "list directory contents"


def test_parse_later_description_wins():
    _, descriptions = parse_man_index(INDEX, 1)
    assert descriptions["cat"] == "second description"


def test_parse_other_section():
    commands, descriptions = parse_man_index(INDEX, 5)
    assert commands == ["fstab"]
    assert descriptions == {"fstab": "static information about the filesystems"}


def test_parse_section_without_entries():
    assert parse_man_index(INDEX, 8) == ([], {})


def test_parse_takes_first_token_and_handles_crlf():
    output = "git-log (1)  - show commit logs\r\nfoo, bar (1) - two names\r\n"
    commands, descriptions = parse_man_index(output, 1)
    assert commands == ["foo,", "git-log"]
    assert descriptions["git-log"] == "show commit logs"


def test_load_builds_database():
    with patch("rtfm.man_db.subprocess.run") as run:
        run.return_value = _completed(["man"], stdout=INDEX.encode())
        db = ManDb.load(1)
    assert run.call_args.args[0] == ["man", "-k", "."]
    assert db.commands == ("cat", "ls")
    assert db.commands_starting_with("l") == ["ls"]
    assert db.get_description("ls") == "list directory contents"
    assert db.get_description("missing") is None


def test_load_failure_raises():
    with patch("rtfm.man_db.subprocess.run") as run:
        run.return_value = _completed(["man"], returncode=16)
        with pytest.raises(ManDbError):
            ManDb.load(1)


def test_load_missing_program_raises():
    with patch("rtfm.man_db.subprocess.run", side_effect=FileNotFoundError("man")):
        with pytest.raises(ManDbError):
            ManDb.load(1)


def test_commands_starting_with():
    db = ManDb(["less", "ln", "ls", "lsof"], {})
    assert db.commands_starting_with("ls") == ["ls", "lsof"]
    assert db.commands_starting_with("x") == []


def test_load_man_page_sets_pager_and_splits_lines():
    with patch("rtfm.man_db.subprocess.run") as run:
        run.return_value = _completed(["man"], stdout=b"NAME\n  ls - list\n\nEND\n")
        lines = load_man_page("ls")
    assert lines == ["NAME", "  ls - list", "", "END"]
    assert run.call_args.args[0] == ["man", "ls"]
    assert run.call_args.kwargs["env"]["PAGER"] == "cat"


def test_load_man_page_failure():
    with patch("rtfm.man_db.subprocess.run") as run:
        run.return_value = _completed(["man"], returncode=1)
        with pytest.raises(ManDbError):
            load_man_page("nothing")


def test_load_man_page_invalid_utf8():
    with patch("rtfm.man_db.subprocess.run") as run:
        run.return_value = _completed(["man"], stdout=b"\xff\xfe bad")
        with pytest.raises(ManDbError):
            load_man_page("ls")


def test_load_tldr_page():
    with patch("rtfm.man_db.subprocess.run") as run:
        run.return_value = _completed(["tldr"], stdout=b"ls\nList files.")
        lines = load_tldr_page("ls")
    assert lines == ["ls", "List files."]
    assert run.call_args.args[0] == ["tldr", "ls"]


def test_display_man_page_runs_man():
    db = ManDb(["ls"], {})
    with patch("rtfm.man_db.subprocess.run") as run:
        run.return_value = _completed(["man"])
        result = db.display_man_page("ls")
    assert result is None
    assert run.call_count == 1
    assert run.call_args.args[0] == ["man", "ls"]
    assert "capture_output" not in run.call_args.kwargs


def test_display_man_page_ignores_exit_status():
    db = ManDb(["ls"], {})
    with patch("rtfm.man_db.subprocess.run") as run:
        run.return_value = _completed(["man"], returncode=16)
        result = db.display_man_page("nothing")
    assert result is None
    assert run.call_args.args[0] == ["man", "nothing"]


def test_display_man_page_missing_program():
    db = ManDb(["ls"], {})
    with patch("rtfm.man_db.subprocess.run", side_effect=FileNotFoundError("man")):
        with pytest.raises(ManDbError):
            db.display_man_page("ls")


@pytest.mark.asyncio
async def test_cache_behavior():
    db = ManDb(["ls"], {"ls": "list directory contents"})
    with patch("rtfm.man_db.subprocess.run") as run:
        run.return_value = _completed(["man"], stdout=b"LS(1)\nNAME\n")
        content = await db.get_man_page("ls")
        cached = await db.get_man_page("ls")
    assert len(content) > 0
    assert len(content) == len(cached)
    assert cached == ("LS(1)", "NAME")
    assert run.call_count == 1


@pytest.mark.asyncio
async def test_man_page_failure_message_is_cached():
    db = ManDb([], {})
    with patch("rtfm.man_db.subprocess.run") as run:
        run.return_value = _completed(["man"], returncode=1)
        first = await db.get_man_page("nope")
        second = await db.get_man_page("nope")
    assert first == ("Failed to load man page: nope",)
    assert second == first
    assert run.call_count == 1


@pytest.mark.asyncio
async def test_tldr_page_cached_separately():
    db = ManDb(["ls"], {})
    with patch("rtfm.man_db.subprocess.run") as run:
        run.side_effect = lambda args, **kwargs: _completed(
            args, stdout=f"{args[0]} output".encode()
        )
        man = await db.get_man_page("ls")
        tldr = await db.get_tldr_page("ls")
        await db.get_tldr_page("ls")
    assert man == ("man output",)
    assert tldr == ("tldr output",)
    assert run.call_count == 2


@pytest.mark.asyncio
async def test_tldr_page_failure_message():
    db = ManDb([], {})
    with patch("rtfm.man_db.subprocess.run", side_effect=FileNotFoundError("tldr")):
        content = await db.get_tldr_page("ls")
    assert content == ("Failed to load tldr page: ls",)