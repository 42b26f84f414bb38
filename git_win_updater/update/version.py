"""
Version comparison helpers

Git for Windows versions look like ``2.41.0.windows.1`` or ``2.41.0.rc1.windows.1``.
They are compared by walking both strings, alternating between numeric runs
(compared as integers) and single separator characters (compared lexically,
with a period sorting before anything else).
"""

import re

_RC_PATTERN = re.compile(r"\.rc\d")


def normalize_version(tag: str) -> str:
    """
    Strip whitespace and a leading ``v`` from a release tag

    Args:
        tag: Tag as published (e.g. "v2.41.0.windows.1")

    Returns:
        str: Bare version (e.g. "2.41.0.windows.1")
    """
    tag = tag.strip()
    if tag[:1] in ("v", "V"):
        tag = tag[1:]
    return tag


def is_release_candidate(version: str) -> bool:
    """Check if a version is a release-candidate build (``*.rcN*``)"""
    return _RC_PATTERN.search(version) is not None


def release_base(version: str) -> str:
    """Return the part of a release-candidate version before its ``.rcN`` marker"""
    match = _RC_PATTERN.search(version)
    return version[: match.start()] if match else version


def _digit_run(text: str, pos: int) -> tuple[str, int]:
    end = pos
    while end < len(text) and "0" <= text[end] <= "9":
        end += 1
    return text[pos:end], end


def _compare_tail(rest_a: str, rest_b: str) -> int:
    # One side ran out. A remainder that continues numerically is a later
    # release (2.41 < 2.41.0); anything else is a pre-release (2.41.0.rc1 < 2.41.0).
    if not rest_a and not rest_b:
        return 0
    if rest_a:
        return 1 if rest_a.lstrip(".")[:1].isdigit() else -1
    return -1 if rest_b.lstrip(".")[:1].isdigit() else 1


def compare_versions(a: str, b: str) -> int:
    """
    Compare two version strings

    Args:
        a: First version
        b: Second version

    Returns:
        int: -1 if a < b, 0 if equal, 1 if a > b

    Example:
        >>> compare_versions("2.41.0", "2.41.1")
        -1
        >>> compare_versions("2.41.0.rc1", "2.41.0")
        -1
    """
    i = j = 0
    while True:
        if i >= len(a) or j >= len(b):
            return _compare_tail(a[i:], b[j:])

        run_a, i = _digit_run(a, i)
        run_b, j = _digit_run(b, j)
        if run_a or run_b:
            if not run_a:
                return -1
            if not run_b:
                return 1
            num_a, num_b = int(run_a), int(run_b)
            if num_a != num_b:
                return -1 if num_a < num_b else 1
        # both runs absent count as zero and fall through

        if i >= len(a) or j >= len(b):
            return _compare_tail(a[i:], b[j:])

        char_a, char_b = a[i], b[j]
        i += 1
        j += 1
        if char_a != char_b:
            if char_a == ".":
                return -1
            if char_b == ".":
                return 1
            return -1 if char_a < char_b else 1

        # a shared trailing period is a boundary: stop comparing there
        if char_a == "." and (i >= len(a) or j >= len(b)):
            return 0
