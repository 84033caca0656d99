"""Gateway path prefix stripping."""


def normalize_path(raw_path: str, prefix_segments: int) -> str:
    """Drop the first `prefix_segments` path segments added by the gateway.

    "/prod/test" with one prefix segment becomes "/test". Paths too short to
    carry the prefix are returned unchanged.
    """
    if prefix_segments < 0:
        raise ValueError(f"prefix_segments must be >= 0, got {prefix_segments}")

    parts = raw_path.split("/")
    # parts[0] is the empty string before the leading slash
    if len(parts) > prefix_segments + 1:
        return "/" + "/".join(parts[prefix_segments + 1:])
    return raw_path
