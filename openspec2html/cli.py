"""
openspec2html - OpenSpec Markdown to HTML Converter

Converts a single OpenSpec markdown document, or a whole OpenSpec
directory tree, to styled HTML.
"""

import argparse
import sys
import json
import os
import logging

from . import __version__
from .converter_api import convert_file, write_output
from .document import parse_document
from .importer import DocumentImporter, STATUS_IMPORTED, STATUS_UPDATED
from .exceptions import OpenSpecError, SecurityError
from .config import DEFAULT_CONFIG

logger = logging.getLogger('openspec2html')


def setup_logging(verbose=False, quiet=False):
    """Configure logging based on CLI flags.

    Args:
        verbose: If True, show DEBUG level messages
        quiet: If True, suppress all non-error output
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    root_logger = logging.getLogger('openspec2html')
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    return handler


def build_parser():
    parser = argparse.ArgumentParser(
        prog="openspec2html",
        description="Convert OpenSpec markdown documents to HTML.",
        epilog="Examples:\n"
               "  openspec2html openspec/specs/auth/design.md -o design.html\n"
               "  openspec2html openspec/specs/auth/design.md -o design.json\n"
               "  openspec2html openspec/ -o site/ --verbose",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument("input", help="Input markdown file or OpenSpec directory")
    parser.add_argument("-o", "--output", required=True,
                        help="Output file (.html, .json for debug) or directory for directory input")
    parser.add_argument("-r", "--root", default=None,
                        help="Documents root for relative paths of a single file "
                             "(default: the '/openspec/' path segment; directory input is its own root)")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", action="store_true", default=False,
                        help="Show detailed debug output")
    parser.add_argument("-q", "--quiet", action="store_true", default=False,
                        help="Suppress all non-error output")
    return parser


def convert_single(input_file, output, root=None):
    """Convert one markdown file to .html or dump its Document as .json."""
    input_size = os.path.getsize(input_file)
    if input_size > DEFAULT_CONFIG.MAX_INPUT_FILE_SIZE:
        raise SecurityError(
            f"Input file too large: {input_size} bytes (max {DEFAULT_CONFIG.MAX_INPUT_FILE_SIZE} bytes)"
        )

    output_ext = os.path.splitext(output)[1].lower()

    if output_ext in [".htm", ".html"]:
        convert_file(input_file, output, root_path=root)
        logger.info("Successfully converted to %s", output)

    elif output_ext == ".json":
        # Debug: output the parsed document
        document = parse_document(input_file, root_path=root)
        write_output(output, json.dumps(document.to_dict(), indent=2, ensure_ascii=False))
        logger.info("Successfully wrote document to %s", output)

    else:
        raise OpenSpecError(f"Unsupported output format: {output_ext} (supported: .html, .htm, .json)")


def convert_directory(input_dir, output_dir):
    """Import every document under *input_dir* into *output_dir*."""
    report = DocumentImporter(input_dir).import_all()
    written = {}
    for record in report.records:
        if record.status in (STATUS_IMPORTED, STATUS_UPDATED):
            if record.document_id in written:
                logger.warning("%s overwrites %s.html written from %s",
                               record.file_path, record.document_id, written[record.document_id])
            written[record.document_id] = record.file_path
            write_output(os.path.join(output_dir, f"{record.document_id}.html"), record.html)
        else:
            logger.info("%s %s: %s", record.status.capitalize(), record.file_path, record.reason)
    return report


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Set up logging
    handler = setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        if os.path.isdir(args.input):
            report = convert_directory(args.input, args.output)
            if report.stats['errors']:
                return 1
        elif os.path.exists(args.input):
            convert_single(args.input, args.output, root=args.root)
        else:
            logger.error("Input not found: %s", args.input)
            return 1
    except OpenSpecError as e:
        logger.error("%s", e)
        return 1
    except Exception as e:
        logger.error("Unexpected error: %s", e)
        return 1
    finally:
        logging.getLogger('openspec2html').removeHandler(handler)

    return 0


if __name__ == "__main__":
    sys.exit(main())
