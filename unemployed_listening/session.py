from pyspark.sql import SparkSession

from unemployed_listening.config import APP_NAME, DRIVER_MEMORY, EXECUTOR_MEMORY, SPARK_MASTER


def create_spark_context(app_name=APP_NAME, master=SPARK_MASTER):
    """Build (or reuse) the Spark session and hand back its SparkContext for the RDD API."""
    spark = SparkSession.builder \
        .appName(app_name) \
        .master(master) \
        .config("spark.executor.memory", EXECUTOR_MEMORY) \
        .config("spark.driver.memory", DRIVER_MEMORY) \
        .getOrCreate()
    return spark.sparkContext
