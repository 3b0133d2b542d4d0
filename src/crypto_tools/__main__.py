"""Main entry point for the crypto_tools package."""
from crypto_tools.cli import cli


def main():
    """Main entry point function."""
    cli()


if __name__ == "__main__":
    main()
