"""CPU affinity computation and launcher script generation."""

from steam_affinity.launcher.affinity import (
    affinity_mask,
    cpu_count,
    default_cpus,
    format_cpu_list,
    format_mask,
    parse_cpu_list,
)
from steam_affinity.launcher.batch import render_launcher, write_launcher

__all__ = [
    "affinity_mask",
    "cpu_count",
    "default_cpus",
    "format_cpu_list",
    "format_mask",
    "parse_cpu_list",
    "render_launcher",
    "write_launcher",
]
