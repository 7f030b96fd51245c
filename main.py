"""
pnmdump
PGM (P2/P5) transcoding, rotation and scaling
"""

import logging
import os
import sys

from utils.constants import VERSION, DEBUG_ENV_VAR
from utils.errors import PnmError

USAGE = (
    "Usage:\n"
    "./pnmdump.exe --version\n"
    "./pnmdump.exe --usage\n"
    "./pnmdump.exe --hexdump [FILE]\n"
    "./pnmdump.exe --P2toP5 [INFILE] [OUTFILE]\n"
    "./pnmdump.exe --P5toP2 [INFILE] [OUTFILE]\n"
    "./pnmdump.exe --rotate [INFILE] [OUTFILE]\n"
    "./pnmdump.exe --rotate90 [INFILE] [OUTFILE]\n"
    "./pnmdump.exe --scaleNn [SCALAR] [INFILE] [OUTFILE]\n"
    "./pnmdump.exe --scaleBl [SCALAR] [INFILE] [OUTFILE]\n"
)


def configure_logging():
    level = logging.DEBUG if os.environ.get(DEBUG_ENV_VAR) else logging.WARNING
    logging.basicConfig(level=level, format="%(name)s: %(levelname)s: %(message)s")


def bad_arguments() -> int:
    sys.stderr.write("pnmdump: bad arguments\n")
    sys.stderr.write(USAGE)
    return 1


def run_hexdump(args) -> int:
    """Dump FILE, or stdin when it is redirected and no file is given."""
    from utils.hexdump import write_hexdump

    if len(args) == 1:
        try:
            with open(args[0], 'rb') as f:
                write_hexdump(f, sys.stdout)
        except FileNotFoundError:
            sys.stderr.write(f'No such file: "{args[0]}"\n')
            return 1
        return 0
    if not args and not sys.stdin.isatty():
        write_hexdump(sys.stdin.buffer, sys.stdout)
        return 0
    return bad_arguments()


def build_session(command: str, args):
    """Returns (session, input_path, output_path) or None for bad arguments."""
    from models.pgm_format import Encoding
    from models.transform_kind import Operation, Interpolation
    from engines.session import ConversionSession

    two_files = {
        '--P2toP5': dict(operation=Operation.CONVERT,
                         input_encoding=Encoding.ASCII, output_encoding=Encoding.BINARY),
        '--P5toP2': dict(operation=Operation.CONVERT,
                         input_encoding=Encoding.BINARY, output_encoding=Encoding.ASCII),
        '--rotate': dict(operation=Operation.TRANSPOSE),
        '--rotate90': dict(operation=Operation.ROTATE90),
    }
    scaled = {
        '--scaleNn': Interpolation.NEAREST,
        '--scaleBl': Interpolation.BILINEAR,
    }

    if command in two_files and len(args) == 2:
        return ConversionSession(**two_files[command]), args[0], args[1]
    if command in scaled and len(args) == 3:
        session = ConversionSession(
            Operation.SCALE, scale_text=args[0], interpolation=scaled[command]
        )
        return session, args[1], args[2]
    return None


def run_conversion(command: str, args) -> int:
    planned = build_session(command, args)
    if planned is None:
        return bad_arguments()

    session, input_path, output_path = planned
    try:
        session.run_files(input_path, output_path)
    except FileNotFoundError as e:
        sys.stderr.write(f'No such file: "{e.filename}"\n')
        return 1
    except (PnmError, OSError) as e:
        sys.stderr.write(f"pnmdump: {e}\n")
        return 1
    return 0


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    configure_logging()

    if not argv:
        return bad_arguments()

    command, args = argv[0], argv[1:]
    if command == '--version' and not args:
        print(VERSION)
        return 0
    if command == '--usage' and not args:
        sys.stdout.write(USAGE)
        return 0
    if command == '--hexdump':
        return run_hexdump(args)
    return run_conversion(command, args)


if __name__ == '__main__':
    sys.exit(main())
