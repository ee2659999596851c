"""Allow ``python -m orgkubectl``."""

from orgkubectl.cli import cli

if __name__ == "__main__":
    cli()
