import argparse
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from src.similarity.config import (
    DEFAULT_BUCKET_COUNT,
    DEFAULT_RANDOM_SEED,
    DEFAULT_SIMULATIONS,
)
from src.similarity.pipeline import results_to_frame, run_comparison_pipeline
from src.similarity.synthetic import generate_sensor_sample, resort_temperatures


def configure_logging(log_level: str):
    """Configure logging with the specified level."""
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )
    return logging.getLogger(__name__)


def cmd_demo(args):
    """Compare a synthetic sensor log with its resorted-temperature counterpart."""
    logger = configure_logging(args.log_level)

    sample_a = generate_sensor_sample(seed=args.data_seed, n_observations=args.observations)
    sample_b = resort_temperatures(sample_a)
    logger.info(
        f"Generated {len(sample_a)} (Temperature, Minute) readings; "
        "sample B pairs the sorted temperatures with the original minutes"
    )

    try:
        output = run_comparison_pipeline(
            sample_a,
            sample_b,
            bucket_count=args.buckets,
            simulate=not args.asymptotic,
            simulations=args.simulations,
            random_seed=args.seed,
            binning=args.binning,
        )
    except ValueError as e:
        logger.error(f"Comparison failed: {e}")
        return 1

    for warning in output["chi_squared_similarity"]["warnings"]:
        logger.warning(warning)

    frame = results_to_frame(output)
    print(frame.to_string(index=False, float_format=lambda v: f"{v:.4f}"))

    p_value = output["chi_squared_similarity"]["p_value"]
    verdict = "differ" if p_value < args.alpha else "do not differ significantly"
    print(f"\nAt alpha={args.alpha}, the joint distributions {verdict} (p={p_value:.4f}).")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Bivariate Similarity - Compare two paired samples for distributional closeness",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Demo command
    demo_parser = subparsers.add_parser(
        "demo", help="Show a joint-structure difference that mean-based tests miss"
    )
    demo_parser.add_argument(
        "--observations",
        type=int,
        default=500,
        help="Number of synthetic sensor readings (default: 500)",
    )
    demo_parser.add_argument(
        "--data-seed",
        type=int,
        default=42,
        help="Seed for the synthetic data (default: 42)",
    )
    demo_parser.add_argument(
        "--buckets",
        type=int,
        default=DEFAULT_BUCKET_COUNT,
        help=f"Quantile bins per dimension (default: {DEFAULT_BUCKET_COUNT})",
    )
    demo_parser.add_argument(
        "--binning",
        choices=["sample", "pooled"],
        default="sample",
        help="Bin each sample on its own quantiles or on pooled edges (default: sample)",
    )
    demo_parser.add_argument(
        "--asymptotic",
        action="store_true",
        help="Use the asymptotic chi-squared p-value instead of Monte Carlo",
    )
    demo_parser.add_argument(
        "--simulations",
        type=int,
        default=DEFAULT_SIMULATIONS,
        help=f"Monte Carlo tables (default: {DEFAULT_SIMULATIONS})",
    )
    demo_parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_RANDOM_SEED,
        help="Seed for the Monte Carlo p-value",
    )
    demo_parser.add_argument(
        "--alpha",
        type=float,
        default=0.05,
        help="Significance level used to phrase the verdict (default: 0.05)",
    )
    demo_parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: INFO)",
    )
    demo_parser.set_defaults(func=cmd_demo)

    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.command is None:
        parser.print_help()
        return

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
