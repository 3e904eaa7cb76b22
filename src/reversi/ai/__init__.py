# Minimum minimax search depth for the hard difficulty.
MIN_SEARCH_DEPTH = 2

# Maximum minimax search depth for the hard difficulty.
MAX_SEARCH_DEPTH = 5

# Search depth used when nothing else is configured.
DEFAULT_SEARCH_DEPTH = 3


def clamp_depth(depth: int) -> int:
    return max(MIN_SEARCH_DEPTH, min(MAX_SEARCH_DEPTH, depth))
