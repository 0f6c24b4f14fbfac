from abc import ABC, abstractmethod
import logging
import os
import platform
import json
import psutil
import time

from rich.logging import RichHandler


def get_machine_info():
    virtual_mem = psutil.virtual_memory()
    system_info = {
        "system": platform.system(),
        "node": platform.node(),
        "release": platform.release(),
        "machine": platform.machine(),
        "processor": platform.processor(),
        "python": platform.python_version(),
    }
    machine_info = {
        "cpu_count": psutil.cpu_count(),
        "memory_total": virtual_mem.total,
        "memory_available": virtual_mem.available,
        "system_info": system_info,
    }
    return machine_info


class ExperimentConfig:
    def __init__(
        self,
        name,
        root_dir="./Experiments",
        result_dir="results",
        log_dir="logs",
    ):
        if not name:
            raise ValueError("experiment name must not be empty")
        self.name = name
        self.root_dir = root_dir
        self.experiment_dir = os.path.join(root_dir, name)
        self.result_dir = os.path.join(self.experiment_dir, result_dir)
        os.makedirs(self.result_dir, exist_ok=True)
        self.log_dir = os.path.join(self.experiment_dir, log_dir)
        os.makedirs(self.log_dir, exist_ok=True)

    def to_dict(self):
        return dict(self.__dict__)

    def __repr__(self):
        return f"{type(self).__name__}({self.to_dict()!r})"


class Experiment(ABC):
    _logger_root = "aliasdraw.experiments"
    _logging_configured = False

    def __init__(self, config: ExperimentConfig):
        self.name = config.name
        self.config = config
        self.metadata_path = os.path.join(config.root_dir, "experiment_metadatas.json")
        self.start_time = time.strftime("%Y%m%d_%H%M%S")
        self._configure_logging()
        self._logger_name = f"{self._logger_root}.{self.name}"
        self.metadata = {
            "name": config.name,
            "result_dir": config.result_dir,
            "log_dir": config.log_dir,
            "experiment_dir": config.experiment_dir,
            "start_time": self.start_time,
        }
        self.logger.info("Experiment %s created at %s", self.name, self.start_time)

    @property
    def logger(self):
        return logging.getLogger(self._logger_name)

    def _configure_logging(self):
        if Experiment._logging_configured:
            return

        log_path = os.path.join(self.config.log_dir, f"main@{self.start_time}.log")
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        console_handler = RichHandler(
            rich_tracebacks=True,
            show_path=False,
            log_time_format="%H:%M:%S",
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))

        # handlers live on the shared parent, so the log file belongs to the
        # first experiment of the process
        logger = logging.getLogger(self._logger_root)
        logger.setLevel(logging.INFO)
        if not logger.handlers:
            logger.addHandler(file_handler)
            logger.addHandler(console_handler)
        logger.propagate = False

        Experiment._logging_configured = True

    def _write_metadata(self):
        metadata = {}
        if os.path.exists(self.metadata_path):
            with open(self.metadata_path, "r", encoding="utf-8") as existing:
                try:
                    metadata = json.load(existing)
                except json.JSONDecodeError:
                    metadata = {}
        metadata[self.name] = self.metadata
        with open(self.metadata_path, "w", encoding="utf-8") as updated:
            json.dump(metadata, updated, indent=4)

    @abstractmethod
    def experiment_main(self):
        pass

    @abstractmethod
    def on_start(self):
        pass

    @abstractmethod
    def on_end(self):
        pass

    def run(self):
        self.logger.info("Experiment %s started", self.name)
        self._write_metadata()
        self.logger.info("Experiment config: %s", self.config)
        self.logger.info("Machine info: %s", get_machine_info())
        self.on_start()
        result = self.experiment_main()
        self.on_end()
        self.logger.info("Experiment %s ended", self.name)
        return result
