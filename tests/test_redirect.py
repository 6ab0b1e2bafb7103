import os
import stat

import pytest

from Osh.errors import RedirectionError
from Osh.parser import Redirect, RedirectKind
from Osh.redirect import STDIN_FILENO, STDOUT_FILENO, open_redirect_target


def test_output_target_is_created_with_group_rw(tmp_path):
    target = tmp_path / "out.txt"
    fd, stream = open_redirect_target(Redirect(RedirectKind.OUTPUT, str(target)))
    os.close(fd)

    assert stream == STDOUT_FILENO
    assert target.exists()
    mode = stat.S_IMODE(target.stat().st_mode)
    assert mode & ~0o660 == 0


def test_output_target_is_not_truncated_by_default(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("XXXXXXXXXX")

    fd, _ = open_redirect_target(Redirect(RedirectKind.OUTPUT, str(target)))
    os.write(fd, b"hi\n")
    os.close(fd)

    assert target.read_text() == "hi\nXXXXXXX"


def test_output_target_truncated_when_configured(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("XXXXXXXXXX")

    fd, _ = open_redirect_target(Redirect(RedirectKind.OUTPUT, str(target)), truncate=True)
    os.write(fd, b"hi\n")
    os.close(fd)

    assert target.read_text() == "hi\n"


def test_input_target_is_read_only(tmp_path):
    source = tmp_path / "in.txt"
    source.write_text("data\n")

    fd, stream = open_redirect_target(Redirect(RedirectKind.INPUT, str(source)))
    try:
        assert stream == STDIN_FILENO
        assert os.read(fd, 100) == b"data\n"
        with pytest.raises(OSError):
            os.write(fd, b"x")
    finally:
        os.close(fd)


def test_missing_input_target(tmp_path):
    with pytest.raises(RedirectionError, match="missing.txt"):
        open_redirect_target(Redirect(RedirectKind.INPUT, str(tmp_path / "missing.txt")))


def test_output_into_missing_directory(tmp_path):
    with pytest.raises(RedirectionError):
        open_redirect_target(Redirect(RedirectKind.OUTPUT, str(tmp_path / "nope" / "out.txt")))
