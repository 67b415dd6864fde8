from __future__ import annotations

import argparse
import logging
import re
import sys
from collections.abc import Sequence

from backlight_control import __version__
from backlight_control.brightness import parse_request
from backlight_control.config import ConfigError, load
from backlight_control.controller import Controller
from backlight_control.errors import BacklightError
from backlight_control.system.backlight import iter_backlight_devices

log = logging.getLogger(__name__)

MINUS = "\u2212"

DESCRIPTION = (
    "Add to, subtract from or set backlight level in PERCENT.\n"
    "If no options given, the program reports current backlight level in percent."
)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="backlight-control",
        usage="%(prog)s [options] [[+-]PERCENT]",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    ap.add_argument("--version", action="version", version=__version__)
    ap.add_argument("-c", "--config", help="YAML config file")
    ap.add_argument("-d", "--device", help="Use this backlight device instead of picking one")
    ap.add_argument("--sysfs-root", help="Backlight class directory (default /sys/class/backlight)")
    ap.add_argument("-l", "--list", action="store_true", help="List backlight devices and exit")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    ap.add_argument("value", nargs="?", metavar="[+-]PERCENT")
    return ap


def _escape_minus(arg: str) -> str:
    return re.sub(r"^-(?=[0-9])", MINUS, arg)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _list_devices(ctl: Controller) -> None:
    selected = ctl.device()
    for dev in iter_backlight_devices(ctl.root):
        mark = "*" if dev == selected else " "
        print(f"{mark} {dev.name}\t{dev.type or '-'}")


def main(argv: Sequence[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    for a in argv:
        if a.startswith(MINUS):
            print(f"Unknown argument: {a}", file=sys.stderr)
            return 1
    # Keep argparse from reading "-10" or "-10%" as options.
    argv = [_escape_minus(a) for a in argv]

    ap = _build_parser()
    args, extra = ap.parse_known_args(argv)
    if extra:
        print(f"Unknown argument: {extra[0]}", file=sys.stderr)
        return 1
    value = args.value.replace(MINUS, "-") if args.value is not None else None

    # Parse before touching any device.
    try:
        request = parse_request(value)
    except BacklightError as e:
        print(e, file=sys.stderr)
        return 1

    try:
        cfg = load(args.config)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1
    if args.sysfs_root:
        cfg["sysfs_root"] = args.sysfs_root
    if args.device:
        cfg["device"] = args.device
    _setup_logging("DEBUG" if args.verbose else cfg["log_level"])

    try:
        if args.list:
            _list_devices(Controller(cfg))
            return 0
        out = Controller(cfg).execute(request)
    except BacklightError as e:
        log.debug("Failed", exc_info=True)
        print(e, file=sys.stderr)
        return 1

    if out is not None:
        print(out)
    return 0


def run() -> None:
    sys.exit(main())
