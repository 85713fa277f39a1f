# cli/commands/translate.py
import click
from storyhub.errors import StoryHubError
from storyhub.sa.database import Database
from storyhub.sa.repositories import StoryRepository, ChapterRepository, TranslationRepository
from storyhub.services.translator import GoogleTranslator
from ..utils import fail

@click.command()
@click.argument('story_id', type=int)
@click.argument('language')
@click.option('--chapter', 'chapter_id', default=None, type=int, help='Translate one chapter instead of the story')
def translate(story_id: int, language: str, chapter_id: int):
    """Translate a story or chapter, reusing a cached translation

    Needs GOOGLE_TRANSLATE_API_KEY unless the translation is already cached.

    Example:
        storyhub translate 4 zu
        storyhub translate 1 fr --chapter 3
    """
    database = Database()
    try:
        with database.get_db() as session:
            found = StoryRepository(session).require(story_id)
            source_text = found.content
            if chapter_id is not None:
                chapter = ChapterRepository(session).get_by_id(chapter_id)
                if chapter is None or chapter.story_id != story_id:
                    fail(f"Chapter {chapter_id} does not belong to story {story_id}")
                source_text = chapter.content

            text = TranslationRepository(session).get_or_create_translation(
                story_id, language, source_text, GoogleTranslator(), chapter_id=chapter_id
            )
        click.echo(text)
    except StoryHubError as e:
        fail(f"Translation failed: {e}")
    finally:
        database.dispose()
