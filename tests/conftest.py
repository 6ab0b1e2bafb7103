import contextlib
import os

import psutil
import pytest

from Osh.log import configure_logging


@pytest.fixture(scope="session", autouse=True)
def _quiet_logging():
    configure_logging("WARNING")


@pytest.fixture(autouse=True)
def _reap_children():
    """Kill and collect anything a test left behind (background commands)."""
    yield
    for proc in psutil.Process().children():
        with contextlib.suppress(psutil.NoSuchProcess):
            proc.kill()
        with contextlib.suppress(ChildProcessError):
            os.waitpid(proc.pid, 0)
