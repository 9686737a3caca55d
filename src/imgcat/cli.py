import argparse
import logging
import sys

from imgcat.converter import image_to_ascii
from imgcat.errors import ImgcatError
from imgcat.terminal import get_terminal_width

log = logging.getLogger("imgcat")

USAGE_EXIT_CODE = 1


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit code 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(USAGE_EXIT_CODE, f"{self.prog}: error: {message}\n")


def _positive_int(value: str) -> int:
    try:
        width = int(value)
    except ValueError:
        width = 0
    if width < 1:
        raise argparse.ArgumentTypeError(f"width must be a positive integer, got {value!r} (usage: -w NUMCHARSWIDE)")
    return width


def setup_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    log.handlers[:] = [handler]
    log.setLevel(logging.DEBUG if verbose else logging.WARNING)
    log.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="imgcat", description="Render a BMP, JPEG or PNG image as ASCII art")
    parser.add_argument(
        "image", nargs="?", default=None, help="Path to input image (default: read a BMP from standard input)"
    )
    parser.add_argument(
        "-w", "--width", type=_positive_int, default=None, help="Output width in columns (default: terminal width)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log decoding details to stderr")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    width = args.width if args.width is not None else get_terminal_width()
    log.debug("Output width: %d columns", width)

    try:
        text = image_to_ascii(args.image, width)
    except ImgcatError as exc:
        print(exc, file=sys.stderr)
        sys.exit(exc.exit_code)

    if text:
        print(text)
