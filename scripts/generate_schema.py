"""Generate JSON schemas for the lint and site config files.

Can be used:
1. As a standalone script: python scripts/generate_schema.py
2. As a pre-commit hook (with --check)
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from quartolint.log import get_logger
from quartolint_config.schema import write_schemas


logger = get_logger(__name__)

DEFAULT_OUTPUT = Path(__file__).parent.parent / "schema"


def main() -> int:
    """Run schema generation."""
    parser = argparse.ArgumentParser(description="Generate config schemas")
    parser.add_argument("--output", "-o", default=DEFAULT_OUTPUT, help="Output directory")
    parser.add_argument(
        "--check",
        "-c",
        action="store_true",
        help="Check if schemas would change without writing",
    )
    args = parser.parse_args()

    try:
        changed = write_schemas(args.output, check_only=args.check)
    except Exception:
        logger.exception("Schema generation failed")
        return 1
    if args.check and changed:
        logger.warning("Schemas would change: %s", ", ".join(changed))
        return 1
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
