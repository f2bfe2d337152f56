"""Allows `python -m billomat_client ...`."""

from __future__ import annotations

from billomat_client.cli.main import run

if __name__ == "__main__":
    run()
