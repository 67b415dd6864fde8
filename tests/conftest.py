from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

MakeDevice = Callable[..., Path]


@pytest.fixture
def sysfs_root(tmp_path: Path) -> Path:
    root = tmp_path / "class" / "backlight"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def make_device(sysfs_root: Path) -> MakeDevice:
    def make(
        name: str,
        type_: str | None = "raw",
        brightness: int | str | None = 0,
        max_brightness: int | str | None = 100,
    ) -> Path:
        d = sysfs_root / name
        d.mkdir()
        for attr, value in (
            ("type", type_),
            ("brightness", brightness),
            ("max_brightness", max_brightness),
        ):
            if value is not None:
                (d / attr).write_text(f"{value}\n", encoding="utf-8")
        return d

    return make
