"""
Module entry point for: python -m pair_parser

Allows running the pair parser directly as a module:
    python -m pair_parser extract <response_path> [options]
    python -m pair_parser stats <response_path>
    python -m pair_parser serve [options]
"""

from .cli import cli


def main():
    cli()


if __name__ == "__main__":
    main()
