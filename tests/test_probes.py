"""Tests for backend.probes: bootc, version file and host introspection."""

from __future__ import annotations

import asyncio
import json
import sys
from unittest.mock import patch

import psutil
import pytest

from backend.errors import ProbeUnavailableError
from backend.models import BootcStatus
from backend.probes.base import BaseProbe
from backend.probes.bootc import BootcProbe
from backend.probes.host import HostIntrospector
from backend.probes.version_file import VersionFileSource


def _python_command(code: str) -> list[str]:
    return [sys.executable, "-c", code]


# ── base probe ─────────────────────────────────────────


class SlowProbe(BaseProbe[str]):
    name = "slow"

    async def fetch(self) -> str:
        await asyncio.sleep(5)
        return "late"

    def fallback(self) -> str:
        return "fallback"


class BrokenProbe(BaseProbe[str]):
    name = "broken"

    async def fetch(self) -> str:
        raise ProbeUnavailableError("nope")

    def fallback(self) -> str:
        return "fallback"


@pytest.mark.asyncio
async def test_base_probe_timeout_uses_fallback():
    assert await SlowProbe(timeout=0.05).read() == "fallback"


@pytest.mark.asyncio
async def test_base_probe_error_uses_fallback():
    assert await BrokenProbe().read() == "fallback"


def test_custom_timeout_override():
    assert SlowProbe(timeout=1.5).timeout == 1.5
    assert SlowProbe().timeout == 5.0


# ── bootc parsing ──────────────────────────────────────


class TestBootcParse:
    def test_no_staged_image(self):
        status = BootcProbe.parse('{"spec":{"image":"v2.1.0"},"status":{"staged":null}}')
        assert status == BootcStatus(current_image="v2.1.0", staged_image=None, update_pending=False)

    def test_staged_image(self):
        doc = {"spec": {"image": "v2.1.0"}, "status": {"staged": {"image": "v2.2.0"}}}
        status = BootcProbe.parse(json.dumps(doc))
        assert status.staged_image == "v2.2.0"
        assert status.update_pending is True

    def test_nested_image_references(self):
        doc = {
            "spec": {"image": {"image": "quay.io/demo/os:v2.1.0", "transport": "registry"}},
            "status": {
                "staged": {
                    "image": {
                        "image": {"image": "quay.io/demo/os:v2.2.0", "transport": "registry"},
                        "version": "v2.2.0",
                    }
                }
            },
        }
        status = BootcProbe.parse(json.dumps(doc))
        assert status.current_image == "quay.io/demo/os:v2.1.0"
        assert status.staged_image == "quay.io/demo/os:v2.2.0"
        assert status.update_pending is True

    def test_missing_sections(self):
        status = BootcProbe.parse("{}")
        assert status == BootcStatus(current_image=None, staged_image=None, update_pending=False)

    def test_empty_output_rejected(self):
        with pytest.raises(ProbeUnavailableError):
            BootcProbe.parse("   ")

    def test_non_object_rejected(self):
        with pytest.raises(ProbeUnavailableError):
            BootcProbe.parse("[1, 2]")

    def test_invalid_json_rejected(self):
        with pytest.raises(ValueError):
            BootcProbe.parse("not json")


# ── bootc command ──────────────────────────────────────


class TestBootcProbe:
    @pytest.mark.asyncio
    async def test_reads_command_output(self):
        doc = {"spec": {"image": "v2.1.0"}, "status": {"staged": {"image": "v2.2.0"}}}
        probe = BootcProbe(_python_command(f"print({json.dumps(json.dumps(doc))})"), timeout=10)
        status = await probe.read()
        assert status.current_image == "v2.1.0"
        assert status.staged_image == "v2.2.0"
        assert status.update_pending is True

    @pytest.mark.asyncio
    async def test_missing_binary_falls_back(self):
        probe = BootcProbe(["definitely-not-installed-bootc-binary", "status"])
        status = await probe.read()
        assert status == BootcStatus(current_image=None, staged_image=None, update_pending=False)

    @pytest.mark.asyncio
    async def test_non_zero_exit_falls_back(self):
        probe = BootcProbe(_python_command("import sys; sys.exit(3)"), timeout=10)
        status = await probe.read()
        assert status.update_pending is False

    @pytest.mark.asyncio
    async def test_garbage_output_falls_back(self):
        probe = BootcProbe(_python_command("print('bootc: not booted')"), timeout=10)
        status = await probe.read()
        assert status.update_pending is False

    @pytest.mark.asyncio
    async def test_hanging_command_times_out(self):
        probe = BootcProbe(_python_command("import time; time.sleep(30)"), timeout=0.5)
        status = await probe.read()
        assert status.update_pending is False


# ── version file ───────────────────────────────────────


class TestVersionFileSource:
    @pytest.mark.asyncio
    async def test_reads_version(self, tmp_path):
        path = tmp_path / "version.json"
        path.write_text(json.dumps({"version": "v2.2.0", "build_sha": "abc123"}))
        assert await VersionFileSource(path).read() == "v2.2.0"

    @pytest.mark.asyncio
    async def test_missing_file_returns_none(self, tmp_path):
        assert await VersionFileSource(tmp_path / "missing.json").read() is None

    @pytest.mark.asyncio
    async def test_malformed_file_returns_none(self, tmp_path):
        path = tmp_path / "version.json"
        path.write_text("{not json")
        assert await VersionFileSource(path).read() is None

    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self, tmp_path):
        path = tmp_path / "version.json"
        path.write_text(json.dumps({"build_sha": "abc123"}))
        assert await VersionFileSource(path).read() is None

    @pytest.mark.asyncio
    async def test_picks_up_external_changes(self, tmp_path):
        path = tmp_path / "version.json"
        source = VersionFileSource(path)
        path.write_text(json.dumps({"version": "v2.1.0"}))
        assert await source.read() == "v2.1.0"
        path.write_text(json.dumps({"version": "v2.2.0"}))
        assert await source.read() == "v2.2.0"


# ── host introspection ─────────────────────────────────


class TestHostIntrospector:
    def test_real_host_readings(self):
        host = HostIntrospector()
        busy = host.cpu_percent()
        assert busy is not None
        assert 0.0 <= busy <= 100.0
        mem = host.memory()
        assert mem is not None and mem[0] > 0
        assert host.cpu_count() >= 1

    def test_host_info_keys(self):
        assert set(HostIntrospector.host_info()) == {"platform", "arch", "hostname", "python_version"}

    def test_unavailable_counters_return_none(self):
        host = HostIntrospector()
        with patch("backend.probes.host.psutil") as mock_psutil:
            mock_psutil.Error = psutil.Error
            mock_psutil.cpu_percent.side_effect = psutil.Error("no /proc/stat")
            mock_psutil.virtual_memory.side_effect = OSError("no meminfo")
            mock_psutil.getloadavg.side_effect = AttributeError("getloadavg")
            mock_psutil.boot_time.side_effect = psutil.Error("no boot time")
            mock_psutil.cpu_count.side_effect = OSError("no cpus")
            assert host.cpu_percent() is None
            assert host.memory() is None
            assert host.load_average() is None
            assert host.uptime_seconds() is None
            assert host.cpu_count() == 0

    def test_cpu_percent_is_primed_on_construction(self):
        with patch("backend.probes.host.psutil.cpu_percent", return_value=0.0) as mock_cpu:
            HostIntrospector()
        mock_cpu.assert_called_once_with(interval=None)

    def test_cpu_percent_passes_through_psutil_value(self):
        host = HostIntrospector()
        with patch("backend.probes.host.psutil.cpu_percent", return_value=50.0):
            assert host.cpu_percent() == 50.0
