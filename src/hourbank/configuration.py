# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "hourbank"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# Set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_DATABASE_PATH: Path = DATA_PATH / "db.sqlite3"


class Configuration(TypedDict):
    database_path: Optional[str]
    tail_count: int
    log_level: str
    show_header: bool


def get_default_configuration() -> Configuration:
    return {
        "database_path": None,
        "tail_count": 10,
        "log_level": "WARNING",
        "show_header": True,
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set DATA_DATABASE_PATH dynamically.

    This must be called after the config file exists and before any
    database engine is created.
    """
    global DATA_DATABASE_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    database_path_setting = config.get("database_path")
    if database_path_setting is not None:
        DATA_DATABASE_PATH = Path(database_path_setting).expanduser()
