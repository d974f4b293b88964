"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from datetime import datetime

import pytest

# Reference time used by classifier and pruner tests
NOW = datetime(2024, 6, 15, 12, 0)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for age computations."""
    return NOW


@pytest.fixture
def mock_listing_output() -> str:
    """Sample `hadoop fs -ls -R /tmp` output for testing."""
    return """Found 6 items
drwxrwxrwx   - hdfs   supergroup          0 2024-06-01 09:00 /tmp/logs
-rw-r--r--   3 etl    hadoop           1024 2024-06-01 09:00 /tmp/logs/app.log
-rw-r--r--   3 etl    hadoop           2048 2024-06-15 11:58 /tmp/logs/fresh.log
-rw-r--r--   3 etl    hadoop            512 2024-05-01 00:00 /tmp/staging/part-00000
drwx------   - mapred hadoop              0 2024-01-01 00:00 /tmp/mapred
-rw-------   3 mapred hadoop            100 2024-01-01 00:00 /tmp/mapred/system/jobtracker.info"""


@pytest.fixture
def mock_directories_only_output() -> str:
    """Listing containing only directories."""
    return """Found 2 items
drwxrwxrwx   - hdfs   supergroup          0 2024-06-01 09:00 /tmp/a
drwxrwxrwx   - hdfs   supergroup          0 2024-06-01 09:00 /tmp/a/b"""


@pytest.fixture
def mock_malformed_output() -> str:
    """Listing with lines that do not match the grammar."""
    return """Found 3 items
ls: `/tmp/missing': No such file or directory
-rw-r--r--   3 etl    hadoop           1024 2024-06-01 09:00 /tmp/ok.log
garbage line"""
