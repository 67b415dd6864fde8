from __future__ import annotations

from pathlib import Path

import pytest

from backlight_control.brightness import Operation, Request
from backlight_control.config import normalize
from backlight_control.controller import Controller, DeviceMisbehaviorError


def _ctl(root: Path, device: str | None = None) -> Controller:
    return Controller(normalize({"sysfs_root": str(root), "device": device}))


def _brightness(d: Path) -> str:
    return (d / "brightness").read_text(encoding="utf-8").strip()


def test_report(sysfs_root: Path, make_device) -> None:
    make_device("intel_backlight", "raw", brightness=50, max_brightness=200)
    assert _ctl(sysfs_root).execute(Request(Operation.REPORT)) == "25%"


def test_add_subtract_set_write_clamped_values(sysfs_root: Path, make_device) -> None:
    d = make_device("intel_backlight", "raw", brightness=50, max_brightness=200)
    ctl = _ctl(sysfs_root)

    assert ctl.execute(Request(Operation.ADD, 30)) is None
    assert _brightness(d) == "110"

    ctl.execute(Request(Operation.SUBTRACT, 80))
    assert _brightness(d) == "0"

    ctl.execute(Request(Operation.SET, 150))
    assert _brightness(d) == "200"


def test_acts_on_selected_device_only(sysfs_root: Path, make_device) -> None:
    raw = make_device("intel_backlight", "raw", brightness=10, max_brightness=100)
    fw = make_device("acpi_video0", "firmware", brightness=1, max_brightness=10)

    _ctl(sysfs_root).execute(Request(Operation.SET, 50))
    assert _brightness(fw) == "5"
    assert _brightness(raw) == "10"


def test_configured_device_overrides_selection(sysfs_root: Path, make_device) -> None:
    raw = make_device("intel_backlight", "raw", brightness=10, max_brightness=100)
    make_device("acpi_video0", "firmware", brightness=1, max_brightness=10)

    _ctl(sysfs_root, device="intel_backlight").execute(Request(Operation.ADD, 5))
    assert _brightness(raw) == "15"


def test_zero_max_brightness_is_fatal(sysfs_root: Path, make_device) -> None:
    d = make_device("broken", "raw", brightness=0, max_brightness=0)
    with pytest.raises(DeviceMisbehaviorError):
        _ctl(sysfs_root).execute(Request(Operation.SET, 50))
    assert _brightness(d) == "0"
