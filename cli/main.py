# cli/main.py
import logging
import click
from .commands.db import db
from .commands.story import story
from .commands.author import author
from .commands.translate import translate

@click.group()
@click.option('--verbose/--no-verbose', default=False, help='Show debug logging')
def cli(verbose: bool):
    """StoryHub content library CLI"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

cli.add_command(db)
cli.add_command(story)
cli.add_command(author)
cli.add_command(translate)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
