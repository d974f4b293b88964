"""Hardcoded safety exclusions that can never be pruned.

These rules protect HDFS locations that are critical for cluster
services (MapReduce staging, HBase, Solr, Hive managed tables, Oozie
share libs, trash) and reject filenames carrying shell or glob metacharacters.
They are applied on top of any user include/exclude pattern and cannot
be disabled from the command line or the configuration file.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SafetyRule:
    """A single non-configurable exclusion rule.

    Attributes:
        name: Short identifier shown in `hdfsprune rules list`.
        pattern: Case-insensitive regex searched anywhere in the listed path.
        description: Why the location is protected.
    """

    name: str
    pattern: re.Pattern[str]
    description: str

    def matches(self, path: str) -> bool:
        """Check if the rule matches anywhere in a path."""
        return self.pattern.search(path) is not None


def _rule(name: str, regex: str, description: str) -> SafetyRule:
    return SafetyRule(name=name, pattern=re.compile(regex, re.IGNORECASE), description=description)


# /tmp is not anchored so that relative listings (../../tmp/mapred) still match.
SAFETY_RULES: tuple[SafetyRule, ...] = (
    _rule("mapred-staging", r"/tmp/mapred/", "MapReduce staging and system directory"),
    _rule("apps", r"/apps/", "HDP service directories (/apps/hive, /apps/hbase, ...)"),
    _rule("hbase", r"/hbase/", "HBase root directory"),
    _rule("solr", r"/solr/", "Solr index directory"),
    _rule("trash", r"\.Trash/", "HDFS trash, already scheduled for expunge"),
    _rule("hive-warehouse", r"warehouse/", "Hive managed tables"),
    _rule("oozie-sharelib", r"share/lib/", "Oozie share lib under /user/oozie"),
    _rule(
        "cloudera-canary",
        r"\.cloudera_health_monitoring_canary_files",
        "Cloudera Manager canary files",
    ),
    _rule("quote-chars", r"['\"`]", "Quotes or backticks in the filename"),
    _rule("command-substitution", r"\$\(", "Shell command substitution in the filename"),
    _rule(
        "hadoop-glob",
        r"[*?\[\]{}]",
        "Glob characters, expanded by hadoop fs -rm to other files",
    ),
)


def match_safety_rule(path: str) -> SafetyRule | None:
    """Return the first safety rule protecting a path.

    Args:
        path: Path as printed by the HDFS listing.

    Returns:
        The matching SafetyRule, or None if the path is not protected.
    """
    for rule in SAFETY_RULES:
        if rule.matches(path):
            return rule
    return None


def is_safety_excluded(path: str) -> bool:
    """Check if a path is protected by any hardcoded safety rule.

    Args:
        path: Path as printed by the HDFS listing.

    Returns:
        True if the path must never be deleted.
    """
    return match_safety_rule(path) is not None
