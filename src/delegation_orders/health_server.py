"""
Health check HTTP server for Kubernetes liveness and readiness probes.

Reports whether an order registry is wired up and how many orders it holds.
"""

from typing import Any

from flask import Flask, Response, jsonify

from delegation_orders import __version__
from delegation_orders.kernel.logging import get_logger
from delegation_orders.notifier import AbsentSink
from delegation_orders.order.registry import OrderRegistry

logger = get_logger(__name__)

app = Flask(__name__)

# Global state - will be set by initialize_health_server()
_registry: OrderRegistry | None = None


def initialize_health_server(registry: OrderRegistry | None) -> None:
    """
    Point the health endpoints at a registry.

    Args:
        registry: Registry to report on (None resets the server)
    """
    global _registry
    _registry = registry
    logger.info("Health server initialized", registered=registry is not None)


@app.after_request
def add_security_headers(response: Response) -> Response:
    """Attach hardening headers to every probe response."""
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Cache-Control"] = "no-store"
    response.headers["Content-Security-Policy"] = "default-src 'none'"
    return response


@app.route("/health/live", methods=["GET"])
def liveness() -> tuple[Any, int]:
    """Liveness probe - the process is running."""
    return jsonify({"status": "alive", "service": "delegation-orders"}), 200


@app.route("/health/ready", methods=["GET"])
def readiness() -> tuple[Any, int]:
    """
    Readiness probe - a registry has been initialized.

    An absent notification sink does not make the service unready; orders
    can still be tracked, they just cannot be announced.
    """
    if _registry is None:
        logger.error("Readiness check failed: registry not initialized")
        return jsonify({"status": "not_ready", "reason": "registry_not_initialized"}), 503

    return jsonify({"status": "ready", "pending_orders": len(_registry)}), 200


@app.route("/health", methods=["GET"])
def detailed_health() -> tuple[Any, int]:
    """
    Detailed health check.

    Degraded when no registry is initialized or notifications have nowhere
    to go.
    """
    health_data: dict[str, Any] = {
        "status": "healthy",
        "service": "delegation-orders",
        "version": __version__,
    }

    if _registry is None:
        health_data["registry"] = {"status": "not_initialized"}
        health_data["status"] = "degraded"
        return jsonify(health_data), 503

    health_data["registry"] = {
        "status": "healthy",
        "pending_orders": len(_registry),
        "host": _registry.host,
    }

    if isinstance(_registry.sink, AbsentSink):
        health_data["notifications"] = {"status": "unconfigured"}
        health_data["status"] = "degraded"
    else:
        health_data["notifications"] = {
            "status": "configured",
            "sink": type(_registry.sink).__name__,
        }

    status_code = 200 if health_data["status"] == "healthy" else 503
    return jsonify(health_data), status_code


def run_health_server(port: int = 8080, debug: bool = False) -> None:
    """
    Run the health check server.

    Args:
        port: Port to listen on (default: 8080)
        debug: Enable Flask debug mode (default: False)
    """
    logger.info("Starting health check server", port=port)
    app.run(host="0.0.0.0", port=port, debug=debug)
