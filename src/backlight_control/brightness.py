from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from backlight_control.errors import BacklightError


class UnknownArgumentError(BacklightError, ValueError):
    pass


class Operation(enum.Enum):
    REPORT = "report"
    ADD = "add"
    SUBTRACT = "subtract"
    SET = "set"


@dataclass(frozen=True)
class Request:
    operation: Operation
    percent: int = 0


_ARG_RE = re.compile(r"^(?P<sign>[+-]?)(?P<digits>[0-9]+)%?$")


def parse_request(arg: str | None) -> Request:
    """Turn the optional command line argument into a Request.

    ``+N`` adds, ``-N`` subtracts and a bare ``N`` sets; a trailing ``%`` is allowed.
    """

    if arg is None:
        return Request(Operation.REPORT)

    m = _ARG_RE.match(arg)
    if not m:
        raise UnknownArgumentError(f"Unknown argument: {arg}")

    percent = int(m.group("digits"))
    sign = m.group("sign")
    if sign == "+":
        return Request(Operation.ADD, percent)
    if sign == "-":
        return Request(Operation.SUBTRACT, percent)
    return Request(Operation.SET, percent)


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(value, hi))


def _scale(max_: int, percent: int) -> int:
    # Truncate toward zero so that add(-p) == subtract(p).
    product = max_ * percent
    q = abs(product) // 100
    return q if product >= 0 else -q


def report_percent(current: int, max_: int) -> int:
    return 100 * current // max_


def add_percent(current: int, max_: int, percent: int) -> int:
    return clamp(current + _scale(max_, percent), 0, max_)


def subtract_percent(current: int, max_: int, percent: int) -> int:
    return clamp(current - _scale(max_, percent), 0, max_)


def set_percent(max_: int, percent: int) -> int:
    return clamp(_scale(max_, percent), 0, max_)


def apply(request: Request, current: int, max_: int) -> int:
    """Return the raw brightness a mutating request asks for."""

    if request.operation is Operation.ADD:
        return add_percent(current, max_, request.percent)
    if request.operation is Operation.SUBTRACT:
        return subtract_percent(current, max_, request.percent)
    if request.operation is Operation.SET:
        return set_percent(max_, request.percent)
    raise ValueError(f"{request.operation.value} does not change brightness")
