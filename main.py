#!/usr/bin/env python3
"""
EDI Decoder Command Line Tool

Decodes X12 837 (claims) and 835 (remittance advice) files to JSON.

Usage:
    python main.py claims.edi                          # Decode claims.edi -> claims.json
    python main.py remit.edi remit.json                # Decode to a specific output file
    python main.py remit.edi --type 835 --pretty       # Force the type, print formatted records
"""

import argparse
import json
import sys
from pathlib import Path

# Try importing from installed package first, fallback to src path
try:
    from decode_service import EDIDecodeService
    from display_format import format_record, summarize
    from edi_config import configure_logging
except ImportError:
    sys.path.insert(0, str(Path(__file__).parent / "src"))
    from decode_service import EDIDecodeService
    from display_format import format_record, summarize
    from edi_config import configure_logging


def print_pretty(document, remittance: bool) -> None:
    for claim in document.claims:
        print("\nClaim")
        nested = []
        for label, value in format_record(claim, remittance).items():
            if "\n" in value:
                nested.append(label)
                continue
            print(f"  {label}: {value}")
        if nested:
            print(f"  ({len(nested)} nested fields omitted: {', '.join(nested)})")


def decode_edi_file(input_file: str, output_file: str, transaction_type: str = "auto", pretty: bool = False) -> int:
    """Decode an EDI file and save the record tree as JSON."""

    print(f"EDI Decoder - Processing {input_file}")
    print("=" * 50)

    try:
        with open(input_file, 'r') as f:
            edi_content = f.read()
    except FileNotFoundError as e:
        print(f"Error: File not found: {e}")
        return 1
    print(f"Loaded {len(edi_content)} characters")

    result = EDIDecodeService().decode(edi_content, transaction_type)
    if not result.success:
        print(f"Error: {result.error}")
        return 1

    print(f"Decoded EDI {result.transactionType} successfully!")
    for title, count in summarize(result.document).items():
        print(f"  {title}: {count}")

    if result.warnings:
        print(f"\n{len(result.warnings)} segments could not be decoded:")
        for warning in result.warnings[:5]:
            print(f"  - {warning.segmentId} (position {warning.position}): {warning.message}")
        if len(result.warnings) > 5:
            print(f"  ... and {len(result.warnings) - 5} more")

    if pretty:
        print_pretty(result.document, remittance=result.transactionType == "835")

    json_output = json.dumps(result.document.model_dump(exclude_none=True), indent=2)
    try:
        with open(output_file, 'w') as f:
            f.write(json_output)
    except OSError as e:
        print(f"Error: Could not write output file: {e}")
        return 1

    print(f"\nJSON output saved to: {output_file}")
    print(f"Output size: {len(json_output):,} characters")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Decode X12 837/835 EDI files to JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py claims.edi                     # claims.edi -> claims.json
  python main.py remit.edi out.json --type 835  # Decode as 835 remittance
        """
    )
    parser.add_argument('input_file', help='Input EDI file')
    parser.add_argument('output_file', nargs='?',
                        help='Output JSON file (default: input_file.json)')
    parser.add_argument('--type', dest='transaction_type', choices=['auto', '837', '835'], default='auto',
                        help='Transaction type (default: detect from ST01/GS01)')
    parser.add_argument('--pretty', action='store_true',
                        help='Print each claim with display formatting applied')
    parser.add_argument('--log-level', default='WARNING',
                        help='Logging level (default: WARNING)')

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.output_file:
        args.output_file = str(Path(args.input_file).with_suffix('.json'))

    return decode_edi_file(args.input_file, args.output_file, args.transaction_type, args.pretty)


if __name__ == "__main__":
    exit(main())
