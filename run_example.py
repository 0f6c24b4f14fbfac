"""
Example script to run goodness-of-fit experiments.
"""
from aliasdraw.experiments import GoodnessOfFitConfig, GoodnessOfFitExperiment

EXAMPLES = {
    'uniform': [1.0, 1.0, 1.0, 1.0],
    'skewed': [0.5, 10.0, 2.0, 0.1, 7.4],
    'with_zero': [0.0, 5.0, 1.0],
    'single': [3.0],
}


def run_examples(mode='many'):
    """Run every weight set in EXAMPLES with the given draw mode."""
    print("=" * 60)
    print(f"Running goodness-of-fit examples ({mode})")
    print("=" * 60)

    for name, weights in EXAMPLES.items():
        print(f"\n--- {name}: {weights} ---")
        config = GoodnessOfFitConfig(
            name=f"{name}_{mode}",
            weights=weights,
            num_draws=200000,
            mode=mode,
            seed=0,
        )
        experiment = GoodnessOfFitExperiment(config)
        experiment.run()


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1:
        if sys.argv[1] in ('one', 'many', 'filtered'):
            run_examples(sys.argv[1])
        else:
            print("Usage: python run_example.py [one|many|filtered]")
    else:
        run_examples()
