import logging
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from storyhub.errors import TranslationUnavailable, ValidationFailed
from storyhub.languages import DEFAULT_LANGUAGE
from storyhub.sa.models import Translation, Story, Chapter
from storyhub.services.translator import TranslateFn

logger = logging.getLogger(__name__)


class TranslationRepository:
    """Translations cached per (story, target language, chapter).

    A missing chapter means the whole story. Rows are written once and never
    retranslated.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_translation(self, story_id: int, target_language: str,
                        chapter_id: Optional[int] = None) -> Optional[Translation]:
        query = self.session.query(Translation).filter(
            Translation.story_id == story_id,
            Translation.target_language == target_language,
        )
        if chapter_id is None:
            query = query.filter(Translation.chapter_id.is_(None))
        else:
            query = query.filter(Translation.chapter_id == chapter_id)
        return query.first()

    def _source_language(self, story_id: int, chapter_id: Optional[int]) -> str:
        story = self.session.get(Story, story_id)
        if story is None:
            raise ValidationFailed(f"Story {story_id} does not exist")
        if chapter_id is not None:
            chapter = self.session.get(Chapter, chapter_id)
            if chapter is None or chapter.story_id != story_id:
                raise ValidationFailed(f"Chapter {chapter_id} does not belong to story {story_id}")
        return story.language or DEFAULT_LANGUAGE

    def create_translation(self, story_id: int, target_language: str, translated_content: str,
                           chapter_id: Optional[int] = None,
                           source_language: Optional[str] = None) -> Translation:
        """Store a translation, or return the one already stored for the key.

        Raises:
            ValidationFailed: If the story or chapter does not exist
        """
        existing = self.get_translation(story_id, target_language, chapter_id)
        if existing:
            return existing

        language = self._source_language(story_id, chapter_id)
        translation = Translation(
            story_id=story_id,
            chapter_id=chapter_id,
            language=source_language or language,
            target_language=target_language,
            translated_content=translated_content,
        )
        try:
            with self.session.begin_nested():
                self.session.add(translation)
        except IntegrityError as e:
            winner = self.get_translation(story_id, target_language, chapter_id)
            if winner is None:
                raise ValidationFailed(f"Cannot store translation: {e.orig}") from e
            self.session.commit()
            return winner

        self.session.commit()
        logger.info("Cached %s translation of story %s (chapter %s)", target_language, story_id, chapter_id)
        return translation

    def get_or_create_translation(self, story_id: int, target_language: str, source_text: str,
                                  translate_fn: TranslateFn,
                                  chapter_id: Optional[int] = None) -> str:
        """Return the cached translation, translating and caching it on a miss.

        Args:
            story_id: Story the text belongs to
            target_language: Language code to translate into
            source_text: Text handed to the translator on a miss
            translate_fn: Callable(text, target_language) -> translated text
            chapter_id: Chapter the text belongs to, None for the whole story

        Returns:
            The translated text

        Raises:
            TranslationUnavailable: If the translator fails. Nothing is stored.
            ValidationFailed: If the story or chapter does not exist
        """
        cached = self.get_translation(story_id, target_language, chapter_id)
        if cached:
            logger.debug("Translation cache hit: story %s, %s, chapter %s", story_id, target_language, chapter_id)
            return cached.translated_content

        self._source_language(story_id, chapter_id)
        translated = translate_fn(source_text, target_language)
        if not isinstance(translated, str) or not translated:
            raise TranslationUnavailable("Translator returned no text")

        return self.create_translation(
            story_id, target_language, translated, chapter_id=chapter_id
        ).translated_content
