# cli/commands/story.py
import click
from storyhub.errors import NotFound, StoryHubError
from storyhub.sa.database import Database
from storyhub.sa.repositories import StoryRepository, ChapterRepository
from ..utils import fail, print_field, print_stories

@click.group()
def story():
    """Browse stories"""
    pass

@story.command(name='list')
@click.option('--featured', is_flag=True, help='Only featured stories, most read first')
@click.option('--search', default=None, help='Case-insensitive title search')
@click.option('--author', 'author_id', default=None, type=int, help='Stories by this author id, drafts included')
@click.option('--limit', default=50, type=int, help='Maximum number of published stories to show')
def list_stories(featured: bool, search: str, author_id: int, limit: int):
    """List published stories

    Example:
        storyhub story list --featured
        storyhub story list --search carol
        storyhub story list --author 1
    """
    if sum(bool(x) for x in (featured, search, author_id is not None)) > 1:
        fail("Use only one of --featured, --search and --author")

    database = Database()
    try:
        with database.get_db() as session:
            repo = StoryRepository(session)
            if featured:
                stories = repo.list_featured()
            elif search:
                stories = repo.search(search)
            elif author_id is not None:
                stories = repo.list_by_author(author_id)
            else:
                stories = repo.list_published(limit=limit)
            print_stories(stories)
    except StoryHubError as e:
        fail(f"Could not list stories: {e}")
    finally:
        database.dispose()

@story.command()
@click.argument('story_id', type=int)
def show(story_id: int):
    """Show a story and its chapters"""
    database = Database()
    try:
        with database.get_db() as session:
            found = StoryRepository(session).require(story_id)
            chapters = ChapterRepository(session).list_by_story(story_id)

            click.echo(click.style(found.title, fg='cyan', bold=True))
            if found.description:
                click.echo(found.description)
            click.echo()
            print_field("Author", found.author.display_name or found.author.username)
            print_field("Genre", found.genre)
            print_field("Language", found.language)
            print_field("Published", "yes" if found.is_published else "no")
            print_field("Reads", found.read_count)
            print_field("Likes", found.like_count)
            print_field("Chapters", found.chapter_count)
            for chapter in chapters:
                click.echo(click.style(f"  {chapter.chapter_number}. ", fg='blue') + chapter.title)
    except NotFound as e:
        fail(str(e))
    except StoryHubError as e:
        fail(f"Could not load story: {e}")
    finally:
        database.dispose()
