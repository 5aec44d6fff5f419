"""
Command Line Interface for ConsultScribe
========================================

This module provides the command-line interface for turning consultation
transcripts into structured SOAP notes.

Usage:
------
    # Process a transcript file
    python cli.py consultation.txt

    # Process text directly, with vitals and pain locations
    python cli.py --text "I have fever and cough for 3 days" \\
        --temperature 101.2 --bp 120/80 --pain-location chest:Chest

    # JSON output, nothing saved
    python cli.py --text "मुझे बुखार है" --json --no-save

CLI Design Principles:
---------------------
1. Sensible defaults (works out of the box)
2. Clear help messages
3. Exit codes for scripting
"""

import argparse
import json
import sys
import logging
from pathlib import Path
from typing import Optional

from pipeline import create_pipeline, save_consultation_to_file
from models import PainLocation, RiskLevel, Vitals
from config import get_settings
from exceptions import ConsultScribeError


# ANSI colors for terminal output
class Colors:
    """ANSI color codes for pretty terminal output."""
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


RISK_COLORS = {
    RiskLevel.LOW: Colors.GREEN,
    RiskLevel.MEDIUM: Colors.YELLOW,
    RiskLevel.HIGH: Colors.RED,
    RiskLevel.CRITICAL: Colors.RED + Colors.BOLD,
}


def colorize(text: str, color: str) -> str:
    """Add color to text if terminal supports it."""
    if sys.stdout.isatty():
        return f"{color}{text}{Colors.ENDC}"
    return text


def print_banner():
    """Print a small banner for the CLI."""
    banner = """
    +--------------------------------------------------------------+
    |                        ConsultScribe                         |
    |            Consultation transcript -> SOAP note              |
    |        Rule-based triage aid. Not a diagnostic tool.         |
    +--------------------------------------------------------------+
    """
    print(colorize(banner, Colors.CYAN))


def parse_pain_location(value: str) -> PainLocation:
    """Parse 'id:Label' (or just 'id') into a PainLocation."""
    location_id, _, label = value.partition(":")
    location_id = location_id.strip()
    if not location_id:
        raise argparse.ArgumentTypeError(f"Invalid pain location: '{value}'")
    return PainLocation(id=location_id, label=label.strip() or location_id.title())


def parse_blood_pressure(value: str) -> tuple[float, float]:
    """Parse '120/80' into (systolic, diastolic)."""
    try:
        systolic, diastolic = value.split("/")
        return float(systolic), float(diastolic)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Blood pressure must look like 120/80, got '{value}'")


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    This defines all CLI options and their help text.
    """
    parser = argparse.ArgumentParser(
        prog="consultscribe",
        description="Convert consultation transcripts to structured SOAP notes",
        epilog="Example: consultscribe transcript.txt --temperature 100.4 --output ./notes",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    # Positional argument: transcript file
    parser.add_argument(
        "transcript_file",
        nargs="?",  # Optional (can use --text instead)
        help="Path to a UTF-8 text file holding the transcript"
    )

    parser.add_argument(
        "--text", "-t",
        type=str,
        help="Process transcript text directly instead of a file"
    )

    # Patient inputs
    parser.add_argument(
        "--pain-location",
        type=parse_pain_location,
        action="append",
        default=[],
        metavar="ID:LABEL",
        help="Pain location picked by the patient (repeatable)"
    )

    vitals = parser.add_argument_group("vitals")
    vitals.add_argument("--temperature", type=float, help="Temperature in °F")
    vitals.add_argument("--bp", type=parse_blood_pressure, metavar="SYS/DIA", help="Blood pressure")
    vitals.add_argument("--pulse", type=float, help="Pulse rate (bpm)")
    vitals.add_argument("--respiratory-rate", type=float, help="Respiratory rate (/min)")
    vitals.add_argument("--spo2", type=float, help="Oxygen saturation (%%)")
    vitals.add_argument("--height", type=float, help="Height in cm")
    vitals.add_argument("--weight", type=float, help="Weight in kg")

    # Processing options
    parser.add_argument(
        "--no-translate",
        action="store_true",
        help="Skip translation of Hindi transcripts"
    )

    # Output options
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output directory for results (default: from settings, ./output)"
    )

    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Don't save results to files, just print"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the consultation as JSON"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Minimal output"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output with debug info"
    )

    parser.add_argument(
        "--no-banner",
        action="store_true",
        help="Don't show the banner"
    )

    return parser


def setup_logging_for_cli(verbose: bool, quiet: bool) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
    )


def build_vitals(parsed_args: argparse.Namespace) -> Vitals:
    """Collect vitals flags into a Vitals record with BMI derived."""
    systolic, diastolic = parsed_args.bp if parsed_args.bp else (None, None)
    vitals = Vitals(
        height=parsed_args.height,
        weight=parsed_args.weight,
        temperature=parsed_args.temperature,
        blood_pressure_systolic=systolic,
        blood_pressure_diastolic=diastolic,
        pulse_rate=parsed_args.pulse,
        respiratory_rate=parsed_args.respiratory_rate,
        oxygen_saturation=parsed_args.spo2,
    )
    return vitals.with_computed_bmi()


def read_transcript(parsed_args: argparse.Namespace) -> str:
    if parsed_args.text is not None:
        return parsed_args.text
    return Path(parsed_args.transcript_file).read_text(encoding="utf-8")


def main(args: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    setup_logging_for_cli(parsed_args.verbose, parsed_args.quiet)

    if not parsed_args.no_banner and not parsed_args.quiet and not parsed_args.json:
        print_banner()

    if not parsed_args.transcript_file and parsed_args.text is None:
        parser.error("Either transcript_file or --text is required")

    try:
        settings = get_settings()
        if parsed_args.no_translate:
            settings = settings.model_copy(update={"enable_translation": False})

        transcript = read_transcript(parsed_args)
        pipeline = create_pipeline(settings)

        if not parsed_args.quiet and not parsed_args.json:
            print(colorize("\nAssembling SOAP note...\n", Colors.CYAN))

        consultation = pipeline.process(
            transcript,
            pain_locations=parsed_args.pain_location,
            vitals=build_vitals(parsed_args),
        )
        note = consultation.soap_note

        if parsed_args.json:
            print(json.dumps(consultation.model_dump(mode='json', by_alias=True), indent=2, ensure_ascii=False))
        else:
            print(note.to_formatted_string())
            risk = note.risk_assessment
            print(colorize(
                f"Risk: {risk.level.value} ({risk.urgency})",
                RISK_COLORS.get(risk.level, Colors.ENDC)
            ))

        if not parsed_args.no_save and settings.save_notes:
            output_dir = parsed_args.output or settings.output_dir
            saved = save_consultation_to_file(consultation, output_dir)
            if not parsed_args.quiet and not parsed_args.json:
                print(colorize(f"\nResults saved to: {output_dir}", Colors.GREEN))
                for file_type, path in saved.items():
                    print(f"   • {file_type}: {path}")

        if not parsed_args.quiet and not parsed_args.json:
            print(colorize("\nDone!\n", Colors.GREEN))

        return 0

    except ConsultScribeError as e:
        print(colorize(f"\nError: {e.message}", Colors.RED), file=sys.stderr)
        if parsed_args.verbose and e.details:
            print(colorize(f"   Details: {e.details}", Colors.YELLOW), file=sys.stderr)
        return 1

    except OSError as e:
        print(colorize(f"\nFile error: {e}", Colors.RED), file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print(colorize("\n\nInterrupted by user", Colors.YELLOW))
        return 130

    except Exception as e:
        print(colorize(f"\nUnexpected error: {e}", Colors.RED), file=sys.stderr)
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
