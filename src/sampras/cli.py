"""
sampras.cli
~~~~~~~~~~~
Command-line interface for sampras.

Entry point registered in pyproject.toml::

    [project.scripts]
    sampras = "sampras.cli:main"

Usage examples
--------------
    sampras --version

    # Upload a receipt and a slip, wait for the recognition result
    sampras --receipt shop.jpg --slip slip.jpg

    # Save the result JSON and allow more retries while it is pending
    sampras --receipt shop.jpg --slip slip.jpg --max-retries 5 --output result.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from importlib.metadata import version
from pathlib import Path
from typing import Optional, Sequence

from sampras.config import Config
from sampras.exceptions import ImageLoadError
from sampras.images import load_payload, payload_size_kb
from sampras.job import ReceiptJob


# ---------------------------------------------------------------------------
# CLI class
# ---------------------------------------------------------------------------

class SamprasCLI:

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------

    def print_version(self) -> None:
        try:
            print(f"sampras version: {version('sampras')}")
        except Exception:
            print("sampras version: unknown")

    # ------------------------------------------------------------------
    # Single job
    # ------------------------------------------------------------------

    def run_job(
        self,
        receipt_path: str | Path,
        slip_path:    str | Path,
        output:       str | Path | None = None,
        max_retries:  int | None = None,
        order:        str = "newest",
        verbose:      bool = False,
    ) -> int:
        """Upload one receipt + slip pair and poll for the result. Returns exit code."""
        receipt_path, slip_path = Path(receipt_path), Path(slip_path)
        for p in (receipt_path, slip_path):
            if not p.exists():
                print(f"[error] File not found: {p}", file=sys.stderr)
                return 2

        config = Config()
        try:
            receipt = load_payload(receipt_path, config)
            slip    = load_payload(slip_path, config)
        except ImageLoadError as exc:
            print(f"[error] {exc}", file=sys.stderr)
            return 2

        if verbose:
            print(f"Receipt: {receipt_path} ({payload_size_kb(receipt)} KB)")
            print(f"Slip:    {slip_path} ({payload_size_kb(slip)} KB)")

        with ReceiptJob(config=config) as job:
            outcome = job.run(receipt, slip, max_attempts=max_retries)
            log_lines = job.session.log.display(order=order)

        for line in log_lines:
            print(line)

        if outcome.result is not None:
            if output:
                out = Path(output)
                out.parent.mkdir(parents=True, exist_ok=True)
                out.write_text(
                    json.dumps(outcome.result, indent=2, ensure_ascii=False),
                    encoding="utf-8",
                )
                print(f"   JSON → {out}")
            elif outcome.success:
                print(json.dumps(outcome.result, indent=2, ensure_ascii=False))

        if outcome.success:
            print(f"✓  Result ready  (token: {outcome.token}, requests: {outcome.attempts})")
            return 0
        print(f"✗  Job failed: {outcome.status.value}", file=sys.stderr)
        return 1


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sampras",
        description="Upload a shop receipt and a payment slip and fetch the recognition result.",
    )
    parser.add_argument(
        "--version", action="store_true",
        help="Print the installed sampras version and exit.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging.",
    )

    job_group = parser.add_argument_group("Job")
    job_group.add_argument(
        "--receipt", metavar="FILE",
        help="Image of the shop receipt.",
    )
    job_group.add_argument(
        "--slip", metavar="FILE",
        help="Image of the payment slip.",
    )
    job_group.add_argument(
        "--max-retries", type=int, default=None, metavar="N",
        help="Retries while the result is pending (default: SAMPRAS_MAX_RETRIES or 3).",
    )
    job_group.add_argument(
        "--output", default=None, metavar="FILE",
        help="Write the result JSON to this file.",
    )
    job_group.add_argument(
        "--order",
        default="newest",
        choices=["newest", "oldest", "timestamp"],
        help="Order of the printed event log. Default: newest.",
    )

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args   = parser.parse_args(argv)
    cli    = SamprasCLI()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)-8s %(name)s — %(message)s",
        )

    if args.version:
        cli.print_version()
        return 0

    if args.max_retries is not None and args.max_retries < 0:
        parser.error("--max-retries must be >= 0")

    if args.receipt and args.slip:
        return cli.run_job(
            receipt_path=args.receipt,
            slip_path=args.slip,
            output=args.output,
            max_retries=args.max_retries,
            order=args.order,
            verbose=args.verbose,
        )

    if args.receipt or args.slip:
        print("[error] Both --receipt and --slip are required.", file=sys.stderr)
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
