from __future__ import annotations

import enum
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

from backlight_control.errors import BacklightError
from backlight_control.system.sysfs import (
    read_int_attribute,
    read_text_attribute,
    write_int_attribute,
)

log = logging.getLogger(__name__)

DEFAULT_SYSFS_ROOT = Path("/sys/class/backlight")


class SubsystemUnavailableError(BacklightError):
    pass


class NoDeviceFoundError(BacklightError):
    pass


class DeviceType(enum.IntEnum):
    """Preference ranking of backlight ``type`` values, higher wins.

    See Documentation/ABI/stable/sysfs-class-backlight in the kernel tree.
    """

    OTHER = 0
    PLATFORM = 1
    FIRMWARE = 2

    @classmethod
    def of(cls, value: str) -> DeviceType:
        try:
            return cls[value.upper()]
        except KeyError:
            return cls.OTHER


@dataclass(frozen=True)
class Backlight:
    sysfs_dir: Path

    @property
    def name(self) -> str:
        return self.sysfs_dir.name

    @property
    def type(self) -> str:
        return read_text_attribute(self.sysfs_dir, "type")

    def brightness(self) -> int:
        return read_int_attribute(self.sysfs_dir, "brightness")

    def max_brightness(self) -> int:
        return read_int_attribute(self.sysfs_dir, "max_brightness")

    def set_brightness(self, value: int) -> None:
        write_int_attribute(self.sysfs_dir, "brightness", value)


class Candidate(NamedTuple):
    device: Backlight
    rank: DeviceType


def iter_backlight_devices(root: Path = DEFAULT_SYSFS_ROOT) -> Iterator[Backlight]:
    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        raise SubsystemUnavailableError(
            f"Cannot enumerate backlight devices in {root}: {e.strerror or e}"
        ) from e
    for entry in entries:
        yield Backlight(entry)


def select_backlight_device(root: Path = DEFAULT_SYSFS_ROOT) -> Backlight:
    """Pick the backlight device whose brightness is authoritative.

    Firmware devices beat platform devices, which beat everything else.
    Within a tier the first device in scan order wins.
    """

    best: Candidate | None = None
    for dev in iter_backlight_devices(root):
        cand = Candidate(dev, DeviceType.of(dev.type))
        log.debug("Candidate %s (%s)", dev.name, cand.rank.name.lower())
        if best is None or cand.rank > best.rank:
            best = cand

    if best is None:
        raise NoDeviceFoundError("Failed to find backlight device.")
    log.debug("Selected %s", best.device.name)
    return best.device


def get_named_device(name: str, root: Path = DEFAULT_SYSFS_ROOT) -> Backlight:
    for dev in iter_backlight_devices(root):
        if dev.name == name:
            return dev
    raise NoDeviceFoundError(f"No such backlight device: {name!r}")
