"""
Module entry point for: python -m docparse_client

Allows running the client directly as a module:
    python -m docparse_client parse <pdf_path> [options]
    python -m docparse_client status <job_id>
"""

from .cli import cli


def main():
    cli()


if __name__ == "__main__":
    main()
