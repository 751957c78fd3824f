"""
Command-line interface for shaft alignment calculations.
"""

import argparse
import logging
import sys
from pathlib import Path

from ..calculator.output import to_json, to_markdown, to_summary
from ..calculator.session import AlignmentSession
from ..calculator.validation import needs_attention, validate_alignment
from ..constants import ADVICE_QUICK_QUERIES
from ..enums import Foot
from ..io import AlignmentDocument, load_session_json, save_session_json
from ..io.schema import create_example_session


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='shaftalign',
        description="Vertical-plane shaft alignment: resulting offset/angle and required shims",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Required shims from readings (motor 0.5 mm low, 0.1 mm/100mm open at top)
  shaftalign --offset -0.5 --angle 0.1

  # Check the effect of a planned shim change
  shaftalign --offset -0.5 --angle 0.1 --rear-shim 0.6 --front-shim 0.5

  # Load a saved session, apply the full correction and write a report
  shaftalign session.json --apply-required --format markdown > report.md

  # Draw the machine train (x150 offset amplification)
  shaftalign session.json --render schematic.svg

  # Ask for advice (requires OPENAI_API_KEY)
  shaftalign session.json --ask "How to remove angular misalignment?"
        """
    )

    parser.add_argument(
        'session_file',
        nargs='?',
        default=None,
        help='Session JSON file (default: start from an empty session)'
    )

    parser.add_argument(
        '--example',
        action='store_true',
        help='Start from the built-in example session instead of a file'
    )

    readings = parser.add_argument_group('readings and geometry (override the session file)')
    readings.add_argument('--offset', type=float, default=None,
                          help='Initial parallel offset in mm (positive = motor high)')
    readings.add_argument('--angle', type=float, default=None,
                          help='Initial angular reading in mm/100mm')
    readings.add_argument('--motor-length', type=float, default=None,
                          help='Distance between rear and front feet in mm (default: 500)')
    readings.add_argument('--coupling-dist', type=float, default=None,
                          help='Distance from front foot to coupling centre in mm (default: 200)')

    shims = parser.add_argument_group('shims')
    shims.add_argument('--rear-shim', type=float, default=None,
                       help='Rear foot shim change in mm (negative = remove)')
    shims.add_argument('--front-shim', type=float, default=None,
                       help='Front foot shim change in mm (negative = remove)')
    shims.add_argument('--apply-required', action='store_true',
                       help='Apply the calculated correction before reporting')

    parser.add_argument(
        '--format',
        choices=['summary', 'markdown', 'json'],
        default='summary',
        help='Report format (default: summary)'
    )
    parser.add_argument('--render', type=str, default=None, metavar='FILE',
                        help='Write a schematic image (format from extension, e.g. .svg, .png)')
    parser.add_argument('--save-json', type=str, default=None, metavar='FILE',
                        help='Save the resulting session as JSON')
    parser.add_argument('--ask', type=str, default=None, metavar='QUERY',
                        help=('Ask the advice service about the result ("" for a general analysis). '
                              'Quick questions: ' + '; '.join(f'"{q}"' for q in ADVICE_QUICK_QUERIES)))
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    return parser


def _load_document(args) -> AlignmentDocument:
    if args.example:
        return AlignmentDocument.model_validate(create_example_session())
    if args.session_file:
        return load_session_json(args.session_file)
    return AlignmentDocument()


def _apply_overrides(session: AlignmentSession, args) -> None:
    geometry_update = {}
    if args.motor_length is not None:
        geometry_update['motor_length_mm'] = args.motor_length
    if args.coupling_dist is not None:
        geometry_update['coupling_distance_mm'] = args.coupling_dist
    if geometry_update:
        session.set_geometry(session.geometry.model_copy(update=geometry_update))

    measurement_update = {}
    if args.offset is not None:
        measurement_update['initial_offset_mm'] = args.offset
    if args.angle is not None:
        measurement_update['initial_angle_mm_per_100'] = args.angle
    if measurement_update:
        session.set_measurements(session.measurements.model_copy(update=measurement_update))

    # Explicit values are not clamped; out-of-range shims are reported as warnings
    if args.rear_shim is not None:
        session.set_shim(Foot.REAR, args.rear_shim)
    if args.front_shim is not None:
        session.set_shim(Foot.FRONT, args.front_shim)


def main(argv=None):
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    try:
        document = _load_document(args)
    except Exception as e:
        print(f"Error loading session: {e}", file=sys.stderr)
        return 1

    session = AlignmentSession.from_document(document)
    _apply_overrides(session, args)

    validation = validate_alignment(session.geometry, session.measurements, session.correction)
    if not validation.valid:
        print("Invalid alignment inputs:", file=sys.stderr)
        for msg in validation.errors:
            print(f"  {msg.code}: {msg.message}", file=sys.stderr)
            if msg.suggestion:
                print(f"    → {msg.suggestion}", file=sys.stderr)
        return 1

    if args.apply_required:
        required = session.apply_required()
        if args.format == 'summary':
            print(f"Applied required shims: rear {required.rear_shim_mm:+.3f} mm, "
                  f"front {required.front_shim_mm:+.3f} mm\n")
        validation = validate_alignment(session.geometry, session.measurements, session.correction)

    document = session.to_document()

    if args.format == 'json':
        print(to_json(document, validation))
    elif args.format == 'markdown':
        print(to_markdown(document, validation))
    else:
        print(to_summary(document))
        for msg in validation.warnings:
            print(f"\n  ⚠️  {msg.message}")
        if needs_attention(session.result) and args.ask is None:
            print("\n  Out of tolerance: add --ask \"\" for alignment advice")

    if args.render:
        # Deferred so plain reports do not pay the matplotlib import
        from ..view import save_schematic

        try:
            path = save_schematic(args.render, session.geometry, session.correction, session.result)
        except Exception as e:
            print(f"Error writing schematic: {e}", file=sys.stderr)
            return 1
        print(f"\nSaved schematic: {path}", file=sys.stderr)

    if args.save_json:
        output_path = Path(args.save_json)
        try:
            save_session_json(document, output_path)
        except Exception as e:
            print(f"Error saving session: {e}", file=sys.stderr)
            return 1
        print(f"\nSaved session JSON: {output_path}", file=sys.stderr)

    if args.ask is not None:
        from ..advice import get_alignment_advice

        advice = get_alignment_advice(session.correction, session.result, args.ask)
        heading = "Advice (attention required):" if needs_attention(session.result) else "Advice:"
        print(f"\n{heading}")
        print(advice)

    return 0


if __name__ == '__main__':
    sys.exit(main())
