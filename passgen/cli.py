"""
Command-line interface: the boundary layer around the generator.

Enforces the minimum length, wires logging, and prints results. Also
exposes the statistical audits and their plots.

    passgen --length 24 --exclude-ambiguous --count 3
    passgen audit --max 90 --trials 200000 --plot residuals.png --plot-entropy entropy.png
"""

from __future__ import annotations

from typing import Optional, Sequence
import argparse
import json
import logging
import sys

from .config import DEFAULT_CONFIG, DEFAULT_LENGTH, MIN_LENGTH, PasswordConfig, validate_length
from .errors import GenerationError, InvalidArgumentError
from .metrics import AuditResult, audit_characters, audit_sampler, audit_shuffle, counts_to_vector
from .passwords import GeneratedPassword, PasswordGenerator
from .pools import build_pools_for
from .sampler import default_sampler

logger = logging.getLogger(__name__)

COMMANDS = ("generate", "audit")


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging verbosity",
    )

    parser = argparse.ArgumentParser(
        prog="passgen",
        description="Generate cryptographically strong passwords.",
    )
    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser(
        "generate",
        parents=[common],
        help="Generate passwords (default command)",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    gen.add_argument("--length", type=int, default=DEFAULT_LENGTH, help="Password length")
    gen.add_argument("--count", type=int, default=1, help="Number of passwords to generate")

    # Character class toggles
    gen.add_argument("--no-upper", dest="upper", action="store_false", help="Exclude uppercase letters")
    gen.add_argument("--no-lower", dest="lower", action="store_false", help="Exclude lowercase letters")
    gen.add_argument("--no-digits", dest="digits", action="store_false", help="Exclude digits")
    gen.add_argument("--no-symbols", dest="symbols", action="store_false", help="Exclude symbols")
    gen.add_argument(
        "--exclude-ambiguous",
        action="store_true",
        help="Avoid look-alike characters such as 0/O, l/1/I, S/5",
    )
    gen.add_argument(
        "--no-guarantee",
        dest="guarantee",
        action="store_false",
        help="Do not enforce at least one character from each selected type",
    )
    gen.add_argument("--json", action="store_true", help="Output as JSON array")

    audit = sub.add_parser(
        "audit",
        parents=[common],
        help="Chi-square audit of the sampler, shuffler and character frequencies",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    audit.add_argument("--max", type=int, default=90, help="Sampler upper bound (exclusive)")
    audit.add_argument("--trials", type=int, default=100_000, help="Draws per audit")
    audit.add_argument("--shuffle-n", type=int, default=4, help="Sequence length for the shuffle audit")
    audit.add_argument("--chars-length", type=int, default=16, help="Password length for the character audit")
    audit.add_argument("--plot", metavar="FILE", help="Save residuals of the audited sampler histogram to FILE")
    audit.add_argument("--plot-counts", metavar="FILE", help="Save the audited sampler histogram to FILE")
    audit.add_argument(
        "--plot-entropy",
        metavar="FILE",
        help="Save the entropy-vs-length curve of the default alphabet to FILE",
    )
    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    argv = list(sys.argv[1:] if argv is None else argv)
    # `generate` is the default command
    if not argv or argv[0] not in COMMANDS + ("-h", "--help"):
        argv.insert(0, "generate")
    return build_parser().parse_args(argv)


def _format(result: GeneratedPassword) -> str:
    return f"{result.password}  ({result.entropy_bits} bits, {result.strength.label})"


def run_generate(args: argparse.Namespace) -> int:
    try:
        validate_length(args.length, MIN_LENGTH)
        config = PasswordConfig.from_flags(
            args.length,
            upper=args.upper,
            lower=args.lower,
            digits=args.digits,
            symbols=args.symbols,
            exclude_ambiguous=args.exclude_ambiguous,
            guarantee_each_type=args.guarantee,
        )
        if args.count < 1:
            raise InvalidArgumentError(f"count must be at least 1, got {args.count}")
        results = PasswordGenerator(config=config).passwords(args.count)
    except GenerationError as ex:
        logger.error(str(ex))
        return 2

    logger.info("generated %d password(s)", len(results))

    if args.json:
        print(json.dumps([
            {
                "password": r.password,
                "entropy_bits": r.entropy_bits,
                "strength": r.strength.label,
            }
            for r in results
        ]))
    else:
        for result in results:
            print(_format(result))
    return 0


def _report(name: str, result: AuditResult) -> str:
    chi = result.chi_square
    return f"{name}: chi2={chi.stat:.2f} df={chi.df} p={chi.pvalue:.4f} kl={result.kl_bits:.2e} bits"


def _save(fig, path: str, what: str) -> None:
    import matplotlib.pyplot as plt

    fig.savefig(path)
    plt.close(fig)
    logger.info("saved %s plot to %s", what, path)


def run_audit(args: argparse.Namespace) -> int:
    sampler = default_sampler()
    pool_set = build_pools_for(DEFAULT_CONFIG)
    try:
        sampled = audit_sampler(args.max, args.trials, sampler)
        shuffled = audit_shuffle(args.shuffle_n, args.trials, sampler)
        if args.chars_length < 1:
            raise InvalidArgumentError(f"chars-length must be at least 1, got {args.chars_length}")
        chars = audit_characters(
            pool_set, args.chars_length, max(1, args.trials // args.chars_length), sampler
        )
    except GenerationError as ex:
        logger.error(str(ex))
        return 2

    print(_report(f"uniform_int({args.max})", sampled))
    print(_report(f"shuffle(n={args.shuffle_n})", shuffled))
    print(_report(f"characters(alphabet={pool_set.alphabet_size})", chars))

    if args.plot or args.plot_counts or args.plot_entropy:
        from .viz import plot_counts_histogram, plot_password_entropy_curve, plot_uniformity_residuals

        title = f"uniform_int({args.max})"
        if args.plot:
            observed = counts_to_vector(sampled.counts, sampled.support_size)
            fig, _ax = plot_uniformity_residuals(observed, sampled.expected_counts(), title=title)
            _save(fig, args.plot, "residuals")
        if args.plot_counts:
            fig, _ax = plot_counts_histogram(sampled.counts, title=title)
            _save(fig, args.plot_counts, "counts")
        if args.plot_entropy:
            fig, _ax = plot_password_entropy_curve(
                range(MIN_LENGTH, 65, 4),
                pool_set.alphabet_size,
                title=f"Entropy over {pool_set.alphabet_size} characters",
            )
            _save(fig, args.plot_entropy, "entropy")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "audit":
        return run_audit(args)
    return run_generate(args)


if __name__ == "__main__":
    sys.exit(main())
