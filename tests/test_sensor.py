#
# Copyright (C) 2026 colormgr Developers — LGPL-3.0-or-later
#

"""
Tests for Sensor proxies against the fake daemon.
"""

import asyncio

import pytest
from fake_colord import SENSOR_IFACE, settle

from colormgr import Capability, ColorManager, Connection, SensorMode, Spectrum
from colormgr.errors import DecodeError, RemoteCallFailure


@pytest.fixture
def sensor(manager, populated):
    return asyncio.run(manager.find_sensor_by_id("colormunki-0"))


class TestProperties:
    """Property getters for sensors."""

    def test_strings(self, sensor):
        async def run_test():
            assert await sensor.sensor_id() == "colormunki-0"
            assert await sensor.kind() == "colormunki"
            assert await sensor.state() == "idle"
            assert await sensor.serial() == "012345678a"
            assert await sensor.model() == "ColorMunki"
            assert await sensor.vendor() == "XRite"

        asyncio.run(run_test())

    def test_mode(self, sensor, daemon):
        async def run_test():
            assert (await sensor.mode()) is SensorMode.AMBIENT
            daemon.sensors[sensor.path].props["Mode"] = ("s", "calibrate")
            assert (await sensor.mode()) is SensorMode.UNKNOWN

        asyncio.run(run_test())

    def test_flags(self, sensor):
        async def run_test():
            assert await sensor.native() is True
            assert await sensor.locked() is False

        asyncio.run(run_test())

    def test_capabilities_are_strings(self, sensor):
        """Capabilities are reported as sent, including ones without a Capability member."""
        assert asyncio.run(sensor.capabilities()) == ["lcd", "crt", "projector", "spot"]

    def test_metadata(self, sensor):
        assert asyncio.run(sensor.metadata()) == {"AttachImage": "attach-colormunki.png"}


class TestLock:
    """Sensor locks are leases held by a connection."""

    def test_lock_unlock(self, sensor):
        async def run_test():
            await sensor.lock()
            assert await sensor.locked() is True
            await sensor.unlock()
            assert await sensor.locked() is False

        asyncio.run(run_test())

    def test_lock_held_elsewhere(self, sensor, daemon):
        async def run_test():
            async with Connection(daemon.connect()) as other:
                theirs = await ColorManager(other).find_sensor_by_id("colormunki-0")
                await theirs.lock()
                with pytest.raises(RemoteCallFailure) as exc_info:
                    await sensor.lock()
                assert exc_info.value.error_name.endswith("AlreadyLocked")

            # released with the connection
            await sensor.lock()

        asyncio.run(run_test())


class TestReadings:
    """Samples and spectra."""

    def test_sample(self, sensor):
        async def run_test():
            await sensor.lock()
            return await sensor.sample(Capability.LCD)

        assert asyncio.run(run_test()) == (0.25, 0.5, 0.125)
        message = sensor.connection.bus.sent[-1]
        assert message.member == "GetSample"
        assert message.body == ["lcd"]

    def test_sample_with_string_capability(self, sensor):
        async def run_test():
            await sensor.lock()
            return await sensor.sample("projector")

        assert len(asyncio.run(run_test())) == 3

    def test_sample_needs_lock(self, sensor):
        async def run_test():
            with pytest.raises(RemoteCallFailure):
                await sensor.sample(Capability.CRT)

        asyncio.run(run_test())

    def test_sample_unsupported(self, sensor):
        async def run_test():
            await sensor.lock()
            with pytest.raises(RemoteCallFailure):
                await sensor.sample(Capability.UNKNOWN)

        asyncio.run(run_test())

    def test_sample_flat_reply(self, sensor, daemon, monkeypatch):
        monkeypatch.setattr(
            daemon, "_sensor_GetSample", lambda bus, message, capability: ("ddd", [1.0, 2.0, 3.0])
        )
        assert asyncio.run(sensor.sample(Capability.LCD)) == (1.0, 2.0, 3.0)

    def test_sample_bad_reply(self, sensor, daemon, monkeypatch):
        monkeypatch.setattr(
            daemon, "_sensor_GetSample", lambda bus, message, capability: ("(dd)", [[1.0, 2.0]])
        )

        async def run_test():
            with pytest.raises(DecodeError):
                await sensor.sample(Capability.LCD)

        asyncio.run(run_test())

    def test_spectrum(self, sensor):
        async def run_test():
            await sensor.lock()
            return await sensor.spectrum(Capability.LCD)

        spectrum = asyncio.run(run_test())
        assert isinstance(spectrum, Spectrum)
        assert spectrum.start == 380.0
        assert spectrum.end == 780.0
        assert spectrum.values == [0.1, 0.2, 0.3, 0.4]

    def test_spectrum_flat_reply(self, sensor, daemon, monkeypatch):
        monkeypatch.setattr(
            daemon,
            "_sensor_GetSpectrum",
            lambda bus, message, capability: ("ddad", [400.0, 700.0, [1.0]]),
        )
        assert asyncio.run(sensor.spectrum(Capability.LED)) == Spectrum(400.0, 700.0, [1.0])


class TestOptions:
    """Tests for set_options() and options()."""

    def test_set_options(self, sensor):
        async def run_test():
            await sensor.set_options({"remote-profiling": True, "sample-rate": 200})
            assert await sensor.options() == {"remote-profiling": True, "sample-rate": 200}

        asyncio.run(run_test())
        message = sensor.connection.bus.sent[-2]
        assert message.member == "SetOptions"
        assert message.signature == "a{sv}"

    def test_options_merge(self, sensor):
        async def run_test():
            await sensor.set_options({"a": "x"})
            await sensor.set_options({"b": 1.5})
            assert await sensor.options() == {"a": "x", "b": 1.5}

        asyncio.run(run_test())


@pytest.mark.signals
class TestButton:
    """Tests for Sensor.button_pressed()."""

    def test_button_pressed(self, sensor, daemon):
        async def run_test():
            waiter = asyncio.ensure_future(sensor.button_pressed())
            await settle()
            daemon.emit(sensor.path, SENSOR_IFACE, "ButtonPressed")
            await asyncio.wait_for(waiter, 1)

        asyncio.run(run_test())

    def test_press_before_wait_missed(self, sensor, daemon):
        async def run_test():
            daemon.emit(sensor.path, SENSOR_IFACE, "ButtonPressed")
            waiter = asyncio.ensure_future(sensor.button_pressed())
            await settle()
            assert not waiter.done()
            waiter.cancel()

        asyncio.run(run_test())
