"""terraform-s3-nuke CLI entry point."""

from .commands.nuke import nuke

cli = nuke


if __name__ == "__main__":
    cli()
