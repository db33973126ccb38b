def matches(candidate_name: str, typed_prefix: str | None) -> bool:
    """
    Check whether `candidate_name` is a plausible completion for `typed_prefix`.

    Case-insensitive substring match, so `Color` finds `backgroundColor`.
    An empty or missing prefix accepts every candidate.
    """
    if not typed_prefix:
        return True
    return typed_prefix.casefold() in candidate_name.casefold()
