from .export import export_ndjson, export_parquet
from .metrics import character_accuracy, daily_accuracy
from .prepare import records_to_frame

__all__ = [
    "records_to_frame",
    "character_accuracy",
    "daily_accuracy",
    "export_parquet",
    "export_ndjson",
]
