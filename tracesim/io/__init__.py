from .json_io import load_records as load_json_records, save_records, save_json
from .csv_io import load_records as load_csv_records, read_log_frame
from .config_loader import load_config, load_log, build_from_config

__all__ = [
    "load_json_records",
    "save_records",
    "save_json",
    "load_csv_records",
    "read_log_frame",
    "load_config",
    "load_log",
    "build_from_config",
]
