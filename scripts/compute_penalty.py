#!/usr/bin/env python3
"""
Compute a GST or TDS late-filing penalty from the command line.

Support staff use this to check a figure a customer questions without
going through the web calculator. Output is the same JSON the HTTP
handler returns.

Usage:
    python3 scripts/compute_penalty.py gst --return-type GSTR3B \\
        --amount 50000 --due 2025-01-31 --filing 2025-03-31 --tax-paid-late
    python3 scripts/compute_penalty.py tds --deduction-type rent \\
        --amount 50000 --due 2025-01-15 --filing 2025-02-09 --deposit 2025-02-01
    python3 scripts/compute_penalty.py gst ... --config path/to/schedule.yaml
"""

import argparse
import json
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from penalty_config import get_active_config  # noqa: E402
from penalty_engines import (  # noqa: E402
    GSTPenaltyInput,
    TDSPenaltyInput,
    compute_gst_penalty,
    compute_tds_penalty,
)
from penalty_kernel import LogContext, PenaltyEngineError, configure_logging  # noqa: E402

EXIT_OK = 0
EXIT_ENGINE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute a GST or TDS late-filing penalty",
    )
    parser.add_argument("--config", help="YAML rule schedule (default: packaged baseline)")
    parser.add_argument("--log-level", help="Override the schedule's log level")
    sub = parser.add_subparsers(dest="calculator", required=True)

    gst = sub.add_parser("gst", help="GST return late fee and interest")
    gst.add_argument("--return-type", required=True, help="GSTR1, GSTR3B or GSTR9")
    gst.add_argument("--tax-paid-late", action="store_true", help="Tax itself was paid late")

    tds = sub.add_parser("tds", help="TDS return late fee and interest")
    tds.add_argument("--deduction-type", required=True,
                     help="salary, contractor, rent, professional, commission or other")
    tds.add_argument("--deposit", help="Date the deducted tax was deposited (YYYY-MM-DD)")
    tds.add_argument("--deposited-late", action="store_true",
                     help="Deposit was late but the date is unknown")

    for p in (gst, tds):
        p.add_argument("--amount", required=True, help="Tax amount in rupees")
        p.add_argument("--due", required=True, help="Due date (YYYY-MM-DD)")
        p.add_argument("--filing", required=True, help="Filing date (YYYY-MM-DD)")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = get_active_config(args.config)
        configure_logging(
            level=(args.log_level or config.settings.log_level).upper(),
            json_logs=config.settings.json_logs,
        )

        with LogContext.bind(calculator=args.calculator):
            if args.calculator == "gst":
                result = compute_gst_penalty(
                    GSTPenaltyInput(
                        return_type=args.return_type,
                        tax_amount=args.amount,
                        due_date=args.due,
                        filing_date=args.filing,
                        tax_paid_late=args.tax_paid_late,
                    ),
                    rule_table=config.rule_table,
                )
            else:
                result = compute_tds_penalty(
                    TDSPenaltyInput(
                        deduction_type=args.deduction_type,
                        tax_amount=args.amount,
                        due_date=args.due,
                        filing_date=args.filing,
                        deposit_date=args.deposit,
                        deposited_late=args.deposited_late,
                    ),
                    rule_table=config.rule_table,
                )
    except PenaltyEngineError as exc:
        print(json.dumps({"error": str(exc), "code": exc.code}), file=sys.stderr)
        return EXIT_ENGINE_ERROR

    print(json.dumps(result.to_dict(), indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
