"""Prometheus metrics for Courier.

Tracks outbound tool executions, their latency, directive detection and
usage-accounting failures.
"""

from prometheus_client import Counter, Histogram

# Tool execution metrics
TOOL_EXECUTIONS = Counter(
    "courier_tool_executions_total",
    "Total number of external tool executions",
    labelnames=["tool_name", "entry_point", "outcome"],
)

TOOL_EXECUTION_LATENCY = Histogram(
    "courier_tool_execution_latency_seconds",
    "External tool round-trip latency in seconds",
    labelnames=["tool_name", "method"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0),
)

TOOL_USAGE_RECORD_ERRORS = Counter(
    "courier_tool_usage_record_errors_total",
    "Usage increments that failed after a successful tool call",
    labelnames=["tool_name"],
)

# Directive metrics
DIRECTIVES_DETECTED = Counter(
    "courier_directives_detected_total",
    "Chat messages that carried a tool directive",
)

# Error metrics
ERRORS = Counter(
    "courier_errors_total",
    "Total number of tool execution errors",
    labelnames=["error_type"],
)
