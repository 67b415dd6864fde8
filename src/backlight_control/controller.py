from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from backlight_control.brightness import Operation, Request, apply, report_percent
from backlight_control.errors import BacklightError
from backlight_control.system.backlight import (
    Backlight,
    get_named_device,
    select_backlight_device,
)

log = logging.getLogger(__name__)


class DeviceMisbehaviorError(BacklightError):
    pass


@dataclass
class Controller:
    cfg: dict[str, Any]

    def __post_init__(self) -> None:
        self.root = Path(self.cfg["sysfs_root"])
        self._device_name: str | None = self.cfg.get("device")

    def device(self) -> Backlight:
        if self._device_name:
            return get_named_device(self._device_name, self.root)
        return select_backlight_device(self.root)

    def execute(self, request: Request) -> str | None:
        """Run one request against the device.

        Returns the text to print for a report, None after a successful write.
        """

        dev = self.device()
        current = dev.brightness()
        max_brightness = dev.max_brightness()
        if max_brightness <= 0:
            raise DeviceMisbehaviorError(
                f"{dev.name} reports max_brightness={max_brightness}"
            )
        log.debug("%s: brightness=%d max_brightness=%d", dev.name, current, max_brightness)

        if request.operation is Operation.REPORT:
            return f"{report_percent(current, max_brightness)}%"

        new_value = apply(request, current, max_brightness)
        log.debug(
            "%s: %s %d%% -> %d", dev.name, request.operation.value, request.percent, new_value
        )
        dev.set_brightness(new_value)
        return None
