from __future__ import annotations

import logging
import re
from pathlib import Path

from backlight_control.errors import BacklightError

log = logging.getLogger(__name__)

_INT_RE = re.compile(r"^-?[0-9]+\Z")


class AttributeReadError(BacklightError):
    pass


class AttributeWriteError(BacklightError):
    pass


def read_text_attribute(device_dir: Path, name: str, default: str = "") -> str:
    """Return the stripped value of a device attribute, or ``default`` if unreadable."""

    try:
        return (device_dir / name).read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        log.debug("Cannot read %s/%s: %s", device_dir, name, e)
        return default


def read_int_attribute(device_dir: Path, name: str) -> int:
    p = device_dir / name
    try:
        raw = p.read_text(encoding="utf-8").strip()
    except OSError as e:
        raise AttributeReadError(f"Failed to read {name}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise AttributeReadError(f"Failed to read {name}: not valid text") from e
    if not _INT_RE.match(raw):
        raise AttributeReadError(f"Failed to read {name}: not an integer: {raw!r}")
    return int(raw)


def write_int_attribute(device_dir: Path, name: str, value: int) -> None:
    # The kernel rejects out of range values with EINVAL, surfaced as OSError.
    try:
        (device_dir / name).write_text(str(int(value)), encoding="utf-8")
    except OSError as e:
        raise AttributeWriteError(f"Failed to set {name}: {e.strerror or e}") from e
    log.debug("Wrote %s=%d to %s", name, value, device_dir)
