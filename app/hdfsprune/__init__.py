"""hdfsprune - Prune aged files from HDFS directory trees."""

__version__ = "0.9.0"
