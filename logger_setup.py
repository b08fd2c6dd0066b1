# logger_setup.py

import logging
import os
import json

LOGGER_NAME = "ghg_sim"


def setup_logging(config_path='config.json'):
    """
    Configures the "ghg_sim" logger from the run configuration.

    Each run gets its own directory, runs/<run_id>/ by default, holding
    simulation.log. Records also go to the console. The logger does not
    propagate to the root logger, so pygame and Numba output stays out of the
    simulation log.

    Data Contract:
    - Inputs: config_path (str) - Path to the JSON configuration file.
    - Outputs: The configured logger.
    - Side Effects: Creates the run's log directory and replaces any
      handlers left by a previous call.
    - Invariants: The config must contain 'run_id' and a 'logging' dictionary
      with 'level' and 'format'. 'logging.directory' is optional.
    """
    with open(config_path, 'r') as f:
        config = json.load(f)

    run_id = config['run_id']
    log_config = config['logging']

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_config['level'].upper())
    logger.propagate = False

    log_dir = os.path.join(log_config.get('directory', 'runs'), run_id)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'simulation.log')

    formatter = logging.Formatter(log_config['format'])
    handlers = [logging.FileHandler(log_file), logging.StreamHandler()]

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized. Run ID: {run_id}. Log file: {log_file}")
    return logger
