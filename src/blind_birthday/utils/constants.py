"""Default parameters for the blind birthday attack."""

# -- Oracle --
DEFAULT_DIGEST_BITS: int = 32  # small enough to finish in reasonable time
MAX_DIGEST_BITS: int = 256  # HMAC-SHA256 output
DIGEST_ALGORITHM: str = "sha256"
KEY_SIZE: int = 32  # bytes

# -- Candidates --
MESSAGE_SIZE: int = 32  # bytes

# -- Benchmark --
DEFAULT_BENCHMARK_WIDTHS: tuple[int, ...] = (8, 16, 24)
DEFAULT_TRIALS: int = 10
