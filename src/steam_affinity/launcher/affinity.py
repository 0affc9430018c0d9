"""CPU affinity masks."""

import os
from typing import Iterable


def cpu_count() -> int:
    """Number of logical CPUs (at least 1)."""
    return os.cpu_count() or 1


def parse_cpu_list(spec: str, count: int) -> list[int]:
    """
    Parse a CPU list like "0,2-5,7".

    Args:
        spec: Comma-separated CPU numbers and inclusive ranges
        count: Number of logical CPUs; entries must be below it

    Returns:
        Sorted, de-duplicated CPU numbers

    Raises:
        ValueError: On malformed, reversed or out-of-range entries
    """
    cpus: set[int] = set()

    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue

        if "-" in part:
            start_text, _, end_text = part.partition("-")
            start, end = int(start_text), int(end_text)
            if start > end:
                raise ValueError(f"Reversed CPU range: {part}")
        else:
            start = end = int(part)

        if start < 0 or end >= count:
            raise ValueError(f"CPU {part} out of range (0-{count - 1})")
        cpus.update(range(start, end + 1))

    if not cpus:
        raise ValueError("No CPUs selected")
    return sorted(cpus)


def default_cpus(count: int, skip: int = 1) -> list[int]:
    """All CPUs except the first `skip`; all of them on small machines."""
    if skip >= count:
        return list(range(count))
    return list(range(skip, count))


def affinity_mask(cpus: Iterable[int]) -> int:
    """Bitmask with bit n set for every CPU n."""
    mask = 0
    for cpu in cpus:
        if cpu < 0:
            raise ValueError(f"Invalid CPU number: {cpu}")
        mask |= 1 << cpu
    return mask


def format_mask(mask: int) -> str:
    """Uppercase hex without prefix, as `start /affinity` expects."""
    return f"{mask:X}"


def describe_mask(mask: int, count: int) -> str:
    """Bit string of the mask, CPU 0 rightmost."""
    return format(mask, f"0{count}b")


def format_cpu_list(cpus: Iterable[int]) -> str:
    """Compact form of a CPU list, e.g. [0, 2, 3, 4] -> "0,2-4"."""
    parts: list[str] = []
    ordered = sorted(set(cpus))
    i = 0
    while i < len(ordered):
        start = ordered[i]
        while i + 1 < len(ordered) and ordered[i + 1] == ordered[i] + 1:
            i += 1
        end = ordered[i]
        parts.append(str(start) if start == end else f"{start}-{end}")
        i += 1
    return ",".join(parts)
