"""
metrics.py - Prometheus metrics for the starledger package.
"""

from prometheus_client import Counter, Gauge, start_http_server

BLOCKS_ADMITTED = Counter(
    'starledger_blocks_admitted_total', 'Total number of blocks appended to the chain'
)
STAR_SUBMISSIONS = Counter(
    'starledger_star_submissions_total', 'Star submissions by outcome', ['outcome']
)
CHAIN_HEIGHT = Gauge(
    'starledger_chain_height',
    'Height of the most recent block in the chain'
)
VALIDATION_ERRORS = Gauge(
    'starledger_chain_validation_errors',
    'Number of errors reported by the last chain validation'
)

def start_metrics_server(port: int = 9100, addr: str = '0.0.0.0') -> None:
    """
    Start an HTTP server to expose Prometheus metrics on /metrics.
    """
    start_http_server(port, addr=addr)
