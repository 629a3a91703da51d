"""Prometheus metrics for RPC health and detection throughput"""

from prometheus_client import Counter, Histogram, generate_latest, start_http_server

# Chain Health Metrics
chain_rpc_latency = Histogram(
    'chain_rpc_latency_seconds',
    'RPC call latency in seconds',
    ['chain', 'method'],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0)
)

chain_rpc_errors = Counter(
    'chain_rpc_errors_total',
    'Total number of RPC errors',
    ['chain', 'error_type']
)

# Detection Metrics
blocks_scanned = Counter(
    'blocks_scanned_total',
    'Total number of blocks scanned',
    ['chain']
)

swaps_classified = Counter(
    'swaps_classified_total',
    'Total number of transactions classified as DEX swaps',
    ['chain', 'exchange', 'direction']
)

arbitrage_flags = Counter(
    'arbitrage_flags_total',
    'Total number of arbitrage flags emitted',
    ['chain', 'kind']
)


def get_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format.

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest()


def start_metrics_server(port: int = 9090) -> None:
    """
    Start Prometheus metrics HTTP server.

    Args:
        port: Port to listen on (default 9090)
    """
    start_http_server(port)
