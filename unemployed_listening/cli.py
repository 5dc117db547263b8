import logging
import sys

from unemployed_listening.config import LOG_LEVEL, TOP_N
from unemployed_listening.correlation import summary_lines, write_results
from unemployed_listening.errors import UnemployedListeningError
from unemployed_listening.pipeline import analyze_trend_table, run_pipeline
from unemployed_listening.session import create_spark_context

logger = logging.getLogger(__name__)

PIPELINE_USAGE = """\
Usage: unemployed-listening <msd_input> <genre_input> <unemployment_input> <output>
  msd_input: Path to the Million Song Dataset file (YEAR<SEP>TRACKID<SEP>...)
  genre_input: Path to the genre annotations file (TRACKID<TAB>GENRE)
  unemployment_input: Path to the unemployment data file (year,month1,...,month12)
  output: Output directory for intermediate and final results"""

CORRELATE_USAGE = """\
Usage: unemployed-listening-correlate <input_dir> <output_file>
  input_dir: Directory containing the pipeline output (year<TAB>genre<TAB>count<TAB>rate)
  output_file: Output file for correlation analysis results"""


def configure_logging():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def pipeline_main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 4:
        print(PIPELINE_USAGE, file=sys.stderr)
        return 1

    configure_logging()
    track_path, genre_path, unemployment_path, output_dir = argv

    sc = create_spark_context()
    try:
        run_pipeline(sc, track_path, genre_path, unemployment_path, output_dir)
    except UnemployedListeningError as exc:
        logger.error("%s", exc)
        print(f"Pipeline failed: {exc}", file=sys.stderr)
        return 1
    finally:
        sc.stop()
    return 0


def correlate_main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 2:
        print(CORRELATE_USAGE, file=sys.stderr)
        return 1

    configure_logging()
    input_dir, output_file = argv

    sc = create_spark_context()
    try:
        results = analyze_trend_table(sc, input_dir)
        write_results(results, output_file)
    except (UnemployedListeningError, OSError) as exc:
        logger.error("%s", exc)
        print(f"Correlation analysis failed: {exc}", file=sys.stderr)
        return 1
    finally:
        sc.stop()

    for line in summary_lines(results, TOP_N):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(pipeline_main())
