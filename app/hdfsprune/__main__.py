"""Allow running hdfsprune with python -m hdfsprune."""

from hdfsprune.cli.main import app

if __name__ == "__main__":
    app()
