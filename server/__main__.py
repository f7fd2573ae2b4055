"""Entry point for running the server as a module

Usage:
    drug-flow-server
    drug-flow-server --port 8080
    DRUG_FLOW_HOST=127.0.0.1 DRUG_FLOW_PORT=9000 python -m server
"""

import os
import sys

import uvicorn

from .app import app


def main():
    """Run the server."""
    host = os.environ.get("DRUG_FLOW_HOST", "0.0.0.0")
    port = int(os.environ.get("DRUG_FLOW_PORT", "8000"))
    for i, arg in enumerate(sys.argv[1:], 1):
        if arg == "--port" and i + 1 < len(sys.argv):
            port = int(sys.argv[i + 1])

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
