from typing import Mapping, Optional

ValidationResults = dict[str, Optional[str]]


def merge_results(results_a: Mapping[str, Optional[str]], results_b: Mapping[str, Optional[str]]) -> ValidationResults:
    """
    Combine two result sets (fully-qualified field key -> None or message).

    `results_a` has priority over `results_b`, except where `results_a` holds a
    passing (None) entry and `results_b`'s entry for the same key is failing:
    a failing entry always beats a passing one. No key of either input is lost.
    """
    combined = [*results_a.items(), *results_b.items()]
    # Failing entries first (stable), then keep the first occurrence of every key
    ordered = [item for item in combined if item[1] is not None] + [item for item in combined if item[1] is None]

    merged: ValidationResults = {}
    for key, value in ordered:
        if key not in merged:
            merged[key] = value
    return merged


__all__ = ["ValidationResults", "merge_results"]
