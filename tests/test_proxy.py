#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#

"""
Tests for the proxy base classes.
"""

import asyncio

import pytest

from colormgr.device import Device
from colormgr.errors import InvalidPathError, RemoteCallFailure
from colormgr.profile import Profile
from colormgr.proxy import EntityProxy, path_to_proxy

DEVICE_PATH = "/org/freedesktop/ColorManager/devices/xrandr_eDP_1"


class TestConstruction:
    """Proxies are handles built from object paths."""

    @pytest.mark.parametrize("path", ["", "devices/1", "/a/", "/a b", "/a//b"])
    def test_invalid_path(self, connection, path):
        with pytest.raises(InvalidPathError):
            Device(connection, path)

    def test_path_to_proxy(self, connection):
        device = path_to_proxy(Device, connection, DEVICE_PATH)
        assert isinstance(device, Device)
        assert device.path == DEVICE_PATH
        assert device.connection is connection
        assert device.interface == "org.freedesktop.ColorManager.Device"
        assert device.destination == "org.freedesktop.ColorManager"

    def test_path_to_proxy_invalid(self, connection):
        with pytest.raises(InvalidPathError):
            path_to_proxy(Profile, connection, "not-a-path")

    def test_from_paths_keeps_order(self, connection):
        paths = ["/c", "/a", "/b"]
        profiles = Profile.from_paths(connection, paths)
        assert [p.path for p in profiles] == paths
        assert all(isinstance(p, Profile) for p in profiles)

    def test_from_paths_empty(self, connection):
        assert Device.from_paths(connection, []) == []

    def test_no_instance_dict(self, connection):
        device = Device(connection, DEVICE_PATH)
        with pytest.raises(AttributeError):
            device.cached_model = "x"

    def test_repr(self, connection):
        assert repr(Device(connection, "/d")) == "Device('/d')"

    def test_entity_base(self):
        assert issubclass(Device, EntityProxy)


class TestEquality:
    """Proxies compare by interface and path."""

    def test_same_path(self, connection, daemon):
        other = type(connection)(daemon.connect())
        assert Device(connection, DEVICE_PATH) == Device(other, DEVICE_PATH)
        assert len({Device(connection, DEVICE_PATH), Device(other, DEVICE_PATH)}) == 1

    def test_different_interface(self, connection):
        assert Device(connection, "/x") != Profile(connection, "/x")

    def test_not_a_proxy(self, connection):
        assert Device(connection, "/x") != "/x"


class TestGetAll:
    """Tests for RemoteObject.get_all()."""

    def test_snake_case_keys(self, connection, populated):
        async def run_test():
            path = next(iter(populated.devices))
            props = await Device(connection, path).get_all()
            assert props["device_id"] == "xrandr-eDP-1"
            assert props["profiling_inhibitors"] == []
            assert props["metadata"]["XRANDR_name"] == "eDP-1"

        asyncio.run(run_test())

    def test_stale_proxy_fails(self, connection):
        async def run_test():
            with pytest.raises(RemoteCallFailure):
                await Device(connection, "/org/freedesktop/ColorManager/devices/gone").get_all()

        asyncio.run(run_test())
