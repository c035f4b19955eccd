import json
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

REPO_ROOT = Path(__file__).resolve().parents[1]
CONFIG_FILE_PATH = os.getenv('ARCADE_CONFIG_PATH', str(REPO_ROOT / 'configs' / 'game_balance.json'))
VERBOSE = os.getenv('ARCADE_VERBOSE', '1') != '0'


def load_config(path=None):
    """
    Loads the main game balance config file.
    """
    config_path = path or CONFIG_FILE_PATH
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
        return config
    except FileNotFoundError:
        print(f"FATAL ERROR: Could not find config file at {config_path}")
        return None
    except Exception as e:
        print(f"FATAL ERROR: Could not parse config file {config_path}: {e}")
        return None


# Load the config ONCE when the module is first imported
BALANCE_CONFIG = load_config()


def get_config(key_path, default=None, config=None):
    """
    Safely gets a value from the loaded config using a 'dot.path'.
    Example: get_config('runner.obstacle_speed')
    """
    source = BALANCE_CONFIG if config is None else config
    if not source:
        return default

    try:
        keys = key_path.split('.')
        value = source
        for key in keys:
            value = value[key]
        return value
    except (KeyError, TypeError):
        print(f"Warning: Could not find config key: {key_path}")
        return default
