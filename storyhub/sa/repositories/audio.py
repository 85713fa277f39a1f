import logging
from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from storyhub.errors import DuplicateKey, ValidationFailed
from storyhub.models.schemas import AudiobookCreate, AudioRecordingCreate, AudioRecordingUpdate
from storyhub.sa.models import Audiobook, AudioRecording, AudioRecordingLike, User, Story, Chapter
from storyhub.sa.models.base import utcnow
from .edge import EdgeRepository

logger = logging.getLogger(__name__)


class AudioRepository:
    """Audiobooks (system narration) and user uploaded audio recordings.

    Only storage references are kept here; the audio itself lives in external
    object storage.
    """

    def __init__(self, session: Session):
        self.session = session
        self.recording_likes = EdgeRepository(
            session, AudioRecordingLike, 'user_id', 'recording_id', User, AudioRecording
        )

    def _check_story_chapter(self, story_id: int, chapter_id: Optional[int]) -> None:
        if self.session.get(Story, story_id) is None:
            raise ValidationFailed(f"Story {story_id} does not exist")
        if chapter_id is not None:
            chapter = self.session.get(Chapter, chapter_id)
            if chapter is None or chapter.story_id != story_id:
                raise ValidationFailed(f"Chapter {chapter_id} does not belong to story {story_id}")

    # Audiobooks

    def get_audiobook(self, story_id: int, language: str, chapter_id: Optional[int] = None) -> Optional[Audiobook]:
        """Look up a narration. There is no create-on-miss."""
        query = self.session.query(Audiobook).filter(
            Audiobook.story_id == story_id,
            Audiobook.language == language,
        )
        if chapter_id is None:
            query = query.filter(Audiobook.chapter_id.is_(None))
        else:
            query = query.filter(Audiobook.chapter_id == chapter_id)
        return query.first()

    def create_audiobook(self, data: AudiobookCreate) -> Audiobook:
        """Register a narration produced by the external narration service.

        Raises:
            ValidationFailed: If the story or chapter does not exist
            DuplicateKey: If a narration already exists for (story, language, chapter)
        """
        self._check_story_chapter(data.story_id, data.chapter_id)
        if self.get_audiobook(data.story_id, data.language, data.chapter_id) is not None:
            raise DuplicateKey(
                f"Audiobook for story {data.story_id} in {data.language} (chapter {data.chapter_id}) already exists"
            )

        audiobook = Audiobook(**data.model_dump(exclude_none=True))
        self.session.add(audiobook)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateKey(f"Audiobook for story {data.story_id} in {data.language} already exists") from e
        return audiobook

    # Recordings

    def create_recording(self, data: AudioRecordingCreate) -> AudioRecording:
        """Store a user uploaded narration.

        Raises:
            ValidationFailed: If the user, story or chapter does not exist
        """
        if self.session.get(User, data.user_id) is None:
            raise ValidationFailed(f"User {data.user_id} does not exist")
        self._check_story_chapter(data.story_id, data.chapter_id)

        recording = AudioRecording(**data.model_dump(exclude_none=True))
        self.session.add(recording)
        self.session.commit()
        logger.info("User %s uploaded recording %s for story %s", data.user_id, recording.id, data.story_id)
        return recording

    def get_recording(self, recording_id: int) -> Optional[AudioRecording]:
        return self.session.get(AudioRecording, recording_id)

    def list_recordings_by_user(self, user_id: int) -> List[AudioRecording]:
        return (
            self.session.query(AudioRecording)
            .filter(AudioRecording.user_id == user_id)
            .order_by(desc(AudioRecording.created_at), desc(AudioRecording.id))
            .all()
        )

    def list_recordings_by_story(self, story_id: int) -> List[AudioRecording]:
        return (
            self.session.query(AudioRecording)
            .filter(AudioRecording.story_id == story_id)
            .order_by(desc(AudioRecording.created_at), desc(AudioRecording.id))
            .all()
        )

    def list_recordings_by_chapter(self, chapter_id: int) -> List[AudioRecording]:
        return (
            self.session.query(AudioRecording)
            .filter(AudioRecording.chapter_id == chapter_id)
            .order_by(desc(AudioRecording.created_at), desc(AudioRecording.id))
            .all()
        )

    def update_recording(self, recording_id: int, data: AudioRecordingUpdate) -> Optional[AudioRecording]:
        """Apply a partial update.

        Returns:
            The updated recording if found, None otherwise
        """
        recording = self.get_recording(recording_id)
        if not recording:
            return None

        changes = data.model_dump(exclude_unset=True)
        if changes.get('chapter_id') is not None:
            self._check_story_chapter(recording.story_id, changes['chapter_id'])
        for field, value in changes.items():
            setattr(recording, field, value)
        recording.updated_at = utcnow()
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ValidationFailed(f"Cannot update recording {recording_id}: {e.orig}") from e
        return recording

    def delete_recording(self, recording_id: int) -> bool:
        """Delete a recording together with its likes"""
        result = self.session.query(AudioRecording).filter(AudioRecording.id == recording_id).delete()
        self.session.commit()
        # Rows removed by ON DELETE CASCADE are still in the identity map
        self.session.expire_all()
        return result > 0

    def increment_play_count(self, recording_id: int) -> bool:
        result = (
            self.session.query(AudioRecording)
            .filter(AudioRecording.id == recording_id)
            .update({AudioRecording.play_count: AudioRecording.play_count + 1}, synchronize_session='fetch')
        )
        self.session.commit()
        return result > 0

    def _sync_like_count(self, recording_id: int) -> None:
        recording = self.get_recording(recording_id)
        if recording is not None:
            recording.like_count = self.recording_likes.count(recording_id)
            self.session.commit()

    def like_recording(self, user_id: int, recording_id: int) -> AudioRecordingLike:
        like = self.recording_likes.add(user_id, recording_id)
        self._sync_like_count(recording_id)
        return like

    def unlike_recording(self, user_id: int, recording_id: int) -> bool:
        removed = self.recording_likes.remove(user_id, recording_id)
        if removed:
            self._sync_like_count(recording_id)
        return removed

    def is_recording_liked(self, user_id: int, recording_id: int) -> bool:
        return self.recording_likes.exists(user_id, recording_id)
