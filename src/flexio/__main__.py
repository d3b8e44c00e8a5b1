"""
flexio CLI entrypoint.

Executed via:
  python -m flexio
"""

from flexio.cli.app import app

if __name__ == "__main__":
    app()
