import click
from press_cli.validate.validate import validate


@click.group()
def cli():
    """Press Sync content validation."""
    pass


# add cli groups here

cli.add_command(validate)
