"""
Command-line entry point: run the optimization gallery.

Usage:
    python -m optgallery
    python -m optgallery --problems vertex_cover coloring --backend scipy
    python -m optgallery --problems logistic_l1 --n-samples 500 --n-features 20 --format json
"""

import argparse
import logging
import sys

from .config import LogisticConfig, MILPConfig, MILP_BACKENDS
from .gallery import PROBLEMS, render_result, results_to_dataframe, run_gallery


def build_parser() -> argparse.ArgumentParser:
    defaults = LogisticConfig()

    parser = argparse.ArgumentParser(
        prog="optgallery",
        description="Solve graph problems and logistic regression as optimization models",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m optgallery
  python -m optgallery --problems matching coloring --backend scipy
  python -m optgallery --problems logistic_l2 logistic_l1 --lam 5 --format csv
        """
    )
    parser.add_argument("--problems", nargs="+", choices=PROBLEMS, default=list(PROBLEMS),
                        help="Examples to run (default: all)")
    parser.add_argument("--backend", choices=MILP_BACKENDS, default="auto",
                        help="ILP backend for the graph problems")
    parser.add_argument("--time-limit", type=float, default=None,
                        help="Time limit in seconds for each ILP solve")
    parser.add_argument("--n-samples", type=int, default=defaults.n_samples,
                        help="Rows of the synthetic regression dataset")
    parser.add_argument("--n-features", type=int, default=defaults.n_features,
                        help="Features of the synthetic regression dataset")
    parser.add_argument("--corr", type=float, default=defaults.corr,
                        help="Constant shift correlating the features")
    parser.add_argument("--seed", type=int, default=defaults.seed, help="Dataset random seed")
    parser.add_argument("--lam", type=float, default=defaults.lam, help="Regularization weight")
    parser.add_argument("--solver", default=None, help="cvxpy conic solver (default: auto)")
    parser.add_argument("--formulation", choices=["conic", "atom"], default="conic",
                        help="Explicit exponential cones or cvxpy's logistic atom")
    parser.add_argument("--format", choices=["table", "json", "csv"], default="table",
                        help="Summary output format")
    parser.add_argument("--quiet", action="store_true", help="Suppress per-example output")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    try:
        milp_config = MILPConfig(backend=args.backend, time_limit=args.time_limit)
        logistic_config = LogisticConfig(
            n_samples=args.n_samples,
            n_features=args.n_features,
            corr=args.corr,
            seed=args.seed,
            lam=args.lam,
            solver=args.solver,
            formulation=args.formulation,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    results = run_gallery(args.problems, milp_config, logistic_config, verbose=not args.quiet)

    if not args.quiet:
        print()
        for result in results.values():
            print(render_result(result))
            print()

    df = results_to_dataframe(results)
    if args.format == "json":
        print(df.to_json(orient="records", indent=2))
    elif args.format == "csv":
        print(df.to_csv(index=False), end="")
    else:
        print(df.to_string(index=False))

    failed = [p for p in args.problems if p not in results or not results[p].valid]
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
