"""
Command-line interface for thread-table generation.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .. import __version__
from ..app import App
from ..calculator.output import to_json, to_summary
from ..errors import ExitCode, ThreadTableError
from ..io.loaders import write_xml

logger = logging.getLogger(__name__)


class _UsageParser(argparse.ArgumentParser):
    """ArgumentParser that exits with EX_USAGE (64) instead of 2."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(ExitCode.USAGE, f"{self.prog}: error: {message}\n")


def _split_offsets(text: str) -> List[str]:
    # Left as strings; ThreadOptions converts them and rejects bad values
    return [part.strip() for part in text.split(',') if part.strip()]


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(
        prog="threadtable",
        description="Calculate thread dimensions and write them to a custom thread-table XML file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # New table for an internal M10x1.5-style thread, default offsets O.0-O.4
  threadtable --angle 60 --pitch 1.5 --diameter 8.5 --internal -o threads.xml

  # Pitch from threads per inch
  threadtable --angle 60 --tpi 20 --diameter 6.35 --external

  # Add a size to an existing table (angle and unit must match)
  threadtable --angle 60 --pitch 0.9 --diameter 4 --external --xml threads.xml --in-place

  # Custom offsets and a comment on the new ThreadSize
  threadtable --angle 60 --pitch 0.9 --diameter 9.45 --internal \\
      --offsets 0,0.1,0.2 --xml-comment "PETG, 0.4 mm nozzle"

  # Just print the calculated values
  threadtable --angle 60 --tpi 22 --diameter 3 --internal --format summary

Exit codes:
  0 success, 64 usage, 65 invalid data, 66 XML parse error,
  67 angle mismatch, 74 I/O error
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f"%(prog)s {__version__}"
    )

    geometry = parser.add_argument_group('thread')
    geometry.add_argument(
        '--angle',
        type=float,
        help='Thread angle in degrees (required, e.g. 60)'
    )
    geometry.add_argument(
        '--pitch',
        type=float,
        help='Thread pitch in mm (exactly one of --pitch/--tpi)'
    )
    geometry.add_argument(
        '--tpi',
        type=float,
        help='Threads per inch, converted to pitch as 25.4/tpi'
    )
    geometry.add_argument(
        '--diameter',
        type=float,
        help='Nominal diameter in mm (required)'
    )

    gender = geometry.add_mutually_exclusive_group()
    gender.add_argument(
        '--internal',
        dest='gender',
        action='store_const',
        const='internal',
        help='Internal thread (nut / tapped hole)'
    )
    gender.add_argument(
        '--external',
        dest='gender',
        action='store_const',
        const='external',
        help='External thread (bolt / screw)'
    )

    geometry.add_argument(
        '--offsets',
        type=_split_offsets,
        default=None,
        help='Comma-separated diametral offsets in mm (default: 0,0.1,0.2,0.3,0.4)'
    )

    document = parser.add_argument_group('document')
    document.add_argument(
        '--xml',
        type=str,
        default=None,
        help='Thread-table XML file; merged into if it exists, otherwise created'
    )
    document.add_argument(
        '--name',
        type=str,
        default=None,
        help='Table name (new documents only, default: "Generated Threads")'
    )
    document.add_argument(
        '--custom-name',
        type=str,
        default=None,
        help='Display name (new documents only, default: same as --name)'
    )
    document.add_argument(
        '--sort-order',
        type=int,
        default=None,
        help='Sort order (new documents only, default: 3)'
    )
    document.add_argument(
        '--xml-comment',
        type=str,
        default=None,
        help='Comment placed before <Size> when a new ThreadSize is created'
    )

    output = parser.add_argument_group('output')
    output.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Write the result to this file (default: stdout)'
    )
    output.add_argument(
        '--in-place',
        action='store_true',
        help='Write the result back to the --xml file'
    )
    output.add_argument(
        '--format',
        choices=['xml', 'summary', 'json'],
        default='xml',
        help='xml: thread-table document (default); summary/json: calculated values only'
    )
    output.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Log progress to stderr (-v info, -vv debug)'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.in_place and not args.xml:
        parser.error('--in-place requires --xml')
    if args.in_place and args.output:
        parser.error('--in-place and --output are mutually exclusive')
    if args.in_place and args.format != 'xml':
        parser.error(f'--in-place only writes XML, not --format {args.format}')

    _configure_logging(args.verbose)

    options = {
        'angle': args.angle,
        'pitch': args.pitch,
        'tpi': args.tpi,
        'diameter': args.diameter,
        'gender': args.gender,
        'offsets': args.offsets,
        'xml': args.xml,
        'name': args.name,
        'custom_name': args.custom_name,
        'sort_order': args.sort_order,
        'xml_comment': args.xml_comment,
    }

    app = App(logger=logging.getLogger("threadtable"))

    try:
        if args.format == 'xml':
            result = app.run(options)
        else:
            calculator = app.calculate(options)
            if args.format == 'json':
                result = to_json(calculator) + "\n"
            else:
                result = to_summary(calculator) + "\n"

        target = args.xml if args.in_place else args.output
        if target:
            write_xml(result, target)
            logger.info(f"Wrote {target}")
        else:
            sys.stdout.write(result)
    except ThreadTableError as e:
        print(f"Error: {e}", file=sys.stderr)
        return int(e.exit_code)

    return int(ExitCode.OK)


if __name__ == "__main__":
    sys.exit(main())
