# cli/commands/author.py
import click
from storyhub.errors import NotFound, StoryHubError
from storyhub.sa.database import Database
from storyhub.sa.repositories import AuthorRepository
from ..utils import fail, print_field

@click.group()
def author():
    """Author commands"""
    pass

@author.command()
@click.argument('author_id', type=int)
def stats(author_id: int):
    """Show story, like and follower counts for an author"""
    database = Database()
    try:
        with database.get_db() as session:
            result = AuthorRepository(session).get_author_stats(author_id)
        print_field("Stories", result.story_count)
        print_field("Likes", result.like_count)
        print_field("Followers", result.follower_count)
    except NotFound as e:
        fail(str(e))
    except StoryHubError as e:
        fail(f"Could not compute stats: {e}")
    finally:
        database.dispose()

@author.command()
def featured():
    """List featured authors in display order"""
    database = Database()
    try:
        with database.get_db() as session:
            authors = AuthorRepository(session).list_featured_authors()
            if not authors:
                click.echo(click.style("No featured authors", fg='yellow'))
            for user in authors:
                click.echo(click.style(f"[{user.id}] ", fg='blue') +
                           click.style(user.display_name or user.username, fg='cyan'))
    except StoryHubError as e:
        fail(f"Could not list featured authors: {e}")
    finally:
        database.dispose()
