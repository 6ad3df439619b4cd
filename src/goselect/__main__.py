"""Module entrypoint for `python -m goselect`."""

from goselect.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
