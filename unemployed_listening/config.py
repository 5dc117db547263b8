import os


def _bool_env(name, default=False):
    val = os.environ.get(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def _int_env(name, default=None):
    val = os.environ.get(name)
    if val is None or val == "":
        return default
    try:
        return int(val)
    except ValueError:
        return default


APP_NAME = "UnemployedListening"

# The earliest year covered by the unemployment reference data
EARLIEST_YEAR = 1948

TRACK_YEAR_DELIMITER = "<SEP>"

# Number of genres shown in the correlation summary
TOP_N = 10

SPARK_MASTER = os.environ.get("UNEMPLOYED_LISTENING_MASTER", "local[*]")
EXECUTOR_MEMORY = os.environ.get("UNEMPLOYED_LISTENING_EXECUTOR_MEMORY", "4g")
DRIVER_MEMORY = os.environ.get("UNEMPLOYED_LISTENING_DRIVER_MEMORY", "4g")

# None lets Spark pick the shuffle partition count
NUM_PARTITIONS = _int_env("UNEMPLOYED_LISTENING_PARTITIONS")

PRE_COMBINE = _bool_env("UNEMPLOYED_LISTENING_PRE_COMBINE", True)

LOG_LEVEL = os.environ.get("UNEMPLOYED_LISTENING_LOG_LEVEL", "INFO")

# Output layout of the full pipeline, relative to the output directory
TRACK_GENRES_DIR = os.path.join("intermediate", "track_genres")
GENRE_COUNTS_DIR = os.path.join("intermediate", "genre_counts")
FINAL_DIR = "final"
