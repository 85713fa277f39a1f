import click
from typing import Iterable

from storyhub.sa.models import Story


def fail(message: str):
    """Print an error in red and exit with status 1"""
    click.echo(click.style(message, fg='red'), err=True)
    raise SystemExit(1)


def print_field(label: str, value, color: str = 'cyan'):
    click.echo(click.style(f"{label}: ", fg='blue') + click.style(str(value), fg=color))


def story_line(story: Story) -> str:
    flags = []
    if story.is_featured:
        flags.append(click.style("featured", fg='yellow'))
    if not story.is_published:
        flags.append(click.style("unpublished", fg='red'))
    line = (
        click.style(f"[{story.id}] ", fg='blue') +
        click.style(story.title, fg='cyan') +
        click.style(f"  {story.genre}, {story.read_count} reads, {story.like_count} likes", fg='white')
    )
    if flags:
        line += "  " + " ".join(flags)
    return line


def print_stories(stories: Iterable[Story]):
    stories = list(stories)
    if not stories:
        click.echo(click.style("No stories found", fg='yellow'))
        return
    for story in stories:
        click.echo(story_line(story))
    click.echo(click.style(f"\n{len(stories)} stories", fg='blue'))
