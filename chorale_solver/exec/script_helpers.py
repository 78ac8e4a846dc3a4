import argparse
import logging


def setup_logging(debug_level):
    # Map debug level string to logging level
    debug_levels = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
    }

    logging.basicConfig(level=debug_levels.get(debug_level, logging.WARNING))


def get_base_parser():
    parser = argparse.ArgumentParser(
        description="Harmonize a bass line as a four-part chorale."
    )
    parser.add_argument(
        "bass_notes",
        type=str,
        nargs="*",
        help="Key numbers (0 = C2) or note names such as C2 or Bb2",
    )
    parser.add_argument(
        "--bass-file",
        type=str,
        default=None,
        help="File with one bass line per line; blank lines and '#' comments are skipped",
    )
    parser.add_argument("--mode", choices=["major", "minor"], default="major")
    parser.add_argument(
        "--minor", dest="mode", action="store_const", const="minor", help="Same as --mode minor"
    )
    parser.add_argument("--output-folder", type=str, default=None)
    parser.add_argument("--basename-prefix", type=str, default=None)
    parser.add_argument("--runner-config", "-R", type=str, default=None)
    parser.add_argument("--composer-config", "-C", type=str, default=None)
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        default="warning",
        help="Set the debugging level",
    )
    parser.add_argument("--log-file", type=str, default=None)
    parser.add_argument("--append-to-log", action="store_true")
    parser.add_argument(
        "--rules", action="store_true", help="Print the rules used and exit"
    )
    parser.add_argument(
        "--lookup-key",
        type=int,
        default=None,
        metavar="N",
        help="Print the name and color of key number N and exit",
    )
    return parser
