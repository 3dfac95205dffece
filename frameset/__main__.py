"""Entry point for python -m frameset"""

from .cli import cli

if __name__ == "__main__":
    cli()
