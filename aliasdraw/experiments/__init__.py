from aliasdraw.experiments.experiment import Experiment, ExperimentConfig, get_machine_info
from aliasdraw.experiments.goodness_of_fit import (
    GoodnessOfFitConfig,
    GoodnessOfFitExperiment,
    chi_squared_fit,
)

__all__ = [
    'Experiment',
    'ExperimentConfig',
    'get_machine_info',
    'GoodnessOfFitConfig',
    'GoodnessOfFitExperiment',
    'chi_squared_fit',
]
