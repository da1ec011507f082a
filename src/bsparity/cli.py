import argparse
import csv
import json
import logging
import sys
from pathlib import Path

from .core import PricingInputs, PricingError, parse_kind, CALL
from .parity import price_with_parity

logger = logging.getLogger(__name__)

_GREEK_FIELDS = ("price", "delta", "gamma", "vega", "theta", "rho")
_BOOK_FIELDS = ("id", "S", "K", "T", "r", "sigma", "kind")


def _kind(s: str):
    try:
        return parse_kind(s)
    except PricingError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def add_common(parser: argparse.ArgumentParser):
    # Kept as text: PricingInputs.from_strings does the parse-and-validate step.
    parser.add_argument("--S", required=True, help="spot price")
    parser.add_argument("--K", required=True, help="strike price")
    parser.add_argument("--T", required=True, help="years")
    parser.add_argument("--r", required=True, help="cont. risk-free")
    parser.add_argument("--sigma", required=True, help="annualised vol, decimal")
    parser.add_argument("--kind", type=_kind, default=CALL, help="call|put")


def _price_record(opt: PricingInputs) -> dict:
    greeks, check = price_with_parity(opt)
    record = greeks.as_dict()
    record["parity"] = check.as_dict()
    record["parity_discrepancy"] = check.discrepancy
    return record


def cmd_price(args) -> int:
    opt = PricingInputs.from_strings(args.S, args.K, args.T, args.r,
                                     args.sigma, args.kind)
    record = _price_record(opt)
    if args.json:
        print(json.dumps(record, indent=2))
        return 0
    for key in _GREEK_FIELDS:
        print(f"{key:<6} {record[key]:.10f}")
    parity = record["parity"]
    print(f"{parity['implied_label']}: {parity['implied_value']:.10f}")
    print(f"{parity['direct_label']}: {parity['direct_value']:.10f}")
    return 0


def _price_row(row: dict) -> dict:
    """Price a single book row and return a flat result dict."""
    opt = PricingInputs.from_strings(row["S"], row["K"], row["T"], row["r"],
                                     row["sigma"], row.get("kind") or CALL)
    record = _price_record(opt)
    parity = record.pop("parity")
    record["parity_implied"] = parity["implied_value"]
    record["parity_direct"] = parity["direct_value"]
    return {"id": row.get("id", ""), **record}


def cmd_book(args) -> int:
    with open(args.input, newline="") as f:
        rows = list(csv.DictReader(f))

    logger.info("pricing %d positions from %s", len(rows), args.input)

    results = []
    for i, row in enumerate(rows):
        try:
            results.append(_price_row(row))
        except (PricingError, KeyError, ArithmeticError) as e:
            logger.error("row %d (id=%s): %s", i, row.get("id", "?"), e)
            results.append({"id": row.get("id", ""), "price": None, "error": str(e)})

    output_path = Path(args.output)
    if output_path.suffix == ".json":
        with open(output_path, "w") as f:
            json.dump(results, f, indent=2)
    else:
        fieldnames = ["id", *_GREEK_FIELDS, "parity_implied", "parity_direct",
                      "parity_discrepancy", "error"]
        with open(output_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(results)

    failed = sum(1 for r in results if r.get("price") is None)
    logger.info("priced %d, failed %d -> %s", len(results) - failed, failed,
                args.output)
    return 2 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bsparity",
        description="Black-Scholes price, Greeks and put-call parity check",
    )
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd", required=True)

    p_price = sub.add_parser("price", help="price one option")
    add_common(p_price)
    p_price.add_argument("--json", action="store_true", help="emit JSON")
    p_price.set_defaults(func=cmd_price)

    p_book = sub.add_parser("book", help="batch-price a CSV book")
    p_book.add_argument("--input", required=True,
                        help="CSV with columns " + ",".join(_BOOK_FIELDS))
    p_book.add_argument("--output", required=True, help="output path (.csv or .json)")
    p_book.set_defaults(func=cmd_book)
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (PricingError, ArithmeticError) as e:
        print(f"bsparity: error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
