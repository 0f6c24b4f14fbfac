"""
Main entry point for sampler experiments.
"""
import argparse
import logging
import sys

from aliasdraw.experiments import GoodnessOfFitConfig, GoodnessOfFitExperiment
from aliasdraw.experiments.goodness_of_fit import MODES
from aliasdraw.sampling import SamplerError


def build_parser():
    parser = argparse.ArgumentParser(description='Weighted sampler goodness-of-fit experiments')
    parser.add_argument('--weights', type=float, nargs='+', default=[1.0, 2.0, 3.0, 4.0],
                        help='Item weights')
    parser.add_argument('--draws', type=int, default=100000,
                        help='Number of draws')
    parser.add_argument('--mode', type=str, default='many', choices=MODES,
                        help='one (sample_one), many (sample_many), filtered (sample_filtered)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed')
    parser.add_argument('--alpha', type=float, default=0.001,
                        help='Significance level of the chi-squared test')
    parser.add_argument('--name', type=str, default=None,
                        help='Experiment name')
    parser.add_argument('--root_dir', type=str, default='./Experiments',
                        help='Directory holding experiment outputs')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # Set default experiment name
    if args.name is None:
        args.name = f"fit_{args.mode}_{len(args.weights)}"

    config = GoodnessOfFitConfig(
        name=args.name,
        weights=args.weights,
        num_draws=args.draws,
        mode=args.mode,
        seed=args.seed,
        alpha=args.alpha,
        root_dir=args.root_dir,
    )
    experiment = GoodnessOfFitExperiment(config)
    try:
        result = experiment.run()
    except SamplerError as exc:
        experiment.logger.error("Sampling failed: %s", exc)
        raise
    return 0 if result["passed"] else 1


if __name__ == "__main__":
    sys.exit(main())
