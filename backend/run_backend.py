"""
Convenience script for starting the FastAPI backend.

If port 8000 is taken, falls back to 8081-8084.

Usage:
    python run_backend.py
"""
import uvicorn
import socket
import sys

from app.config import settings

PORTS_TO_TRY = [8000, 8081, 8082, 8083, 8084]


def is_port_in_use(port: int) -> bool:
    """Check whether a local port is already bound."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind(('127.0.0.1', port))
            return False
        except OSError:
            return True


def find_free_port() -> int:
    """First free port from PORTS_TO_TRY, or 0 if all are taken."""
    for port in PORTS_TO_TRY:
        if not is_port_in_use(port):
            return port
    return 0


def main():
    """Start the FastAPI server."""
    port = find_free_port()
    if not port:
        print("Error: ports 8000-8084 are all in use, stop another service or pick a port manually")
        sys.exit(1)
    if port != PORTS_TO_TRY[0]:
        print(f"Port {PORTS_TO_TRY[0]} is in use, switching to port {port}")

    print(f"Starting server: http://127.0.0.1:{port}")
    print(f"API docs: http://127.0.0.1:{port}/docs")

    uvicorn.run(
        "app.main:app",
        host="127.0.0.1",
        port=port,
        reload=True,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
