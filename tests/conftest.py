# colormgr test configuration and shared fixtures
from __future__ import annotations

import os
import tempfile

import pytest
from fake_colord import FakeColord

from colormgr.connection import Connection
from colormgr.manager import ColorManager


# ─────────────────────────────────────────────────────────────────────────────
# Daemon fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def daemon() -> FakeColord:
    """Empty in-process colord."""
    return FakeColord()


@pytest.fixture
def connection(daemon) -> Connection:
    """Connection to the fake daemon."""
    return Connection(daemon.connect())


@pytest.fixture
def manager(connection) -> ColorManager:
    """Manager proxy on the shared test connection."""
    return ColorManager(connection)


@pytest.fixture
def populated(daemon) -> FakeColord:
    """Daemon with a laptop panel, two profiles and a colorimeter."""
    daemon.add_device(
        "xrandr-eDP-1",
        Kind="display",
        Model="B140QAN02.0",
        Vendor="AU Optronics",
        Embedded=True,
        Metadata={"XRANDR_name": "eDP-1", "OutputEdidMd5": "7c1a8fc"},
    )
    daemon.add_device("cups-Photosmart", Kind="printer", Mode="virtual",
                      Format="ColorModel.OutputMode.OutputResolution")
    daemon.add_profile(
        "icc-srgb",
        Title="sRGB",
        Filename="/usr/share/color/icc/colord/sRGB.icc",
        IsSystemWide=True,
        Metadata={"STANDARD_space": "srgb"},
    )
    daemon.add_profile("icc-glossy", Kind="output-device", Qualifier="RGB.Glossy.300dpi")
    daemon.add_sensor("colormunki-0")
    return daemon


@pytest.fixture
def icc_file():
    """Open temporary file standing in for an ICC profile."""
    fd, path = tempfile.mkstemp(suffix=".icc")
    os.write(fd, b"\x00\x00\x02\x0cacsp")
    os.lseek(fd, 0, os.SEEK_SET)
    with os.fdopen(fd, "rb") as handle:
        yield handle
    os.unlink(path)


# ─────────────────────────────────────────────────────────────────────────────
# Pytest configuration
# ─────────────────────────────────────────────────────────────────────────────


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "signals: marks tests waiting for bus signals")
