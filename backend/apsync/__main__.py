"""Run the sync server: `python -m apsync`."""

from apsync.main import run

if __name__ == "__main__":
    run()
