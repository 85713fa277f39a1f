# storyhub/sa/repositories/edge.py
import logging
from typing import Generic, List, Optional, Type, TypeVar
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storyhub.errors import ValidationFailed

logger = logging.getLogger(__name__)

EdgeT = TypeVar('EdgeT')
SubjectT = TypeVar('SubjectT')
ObjectT = TypeVar('ObjectT')


class EdgeRepository(Generic[EdgeT, SubjectT, ObjectT]):
    """Toggle-style access to one join table of the engagement graph.

    An edge points from a subject row to an object row. The pair is unique, so
    adding an edge twice hands back the existing row and removing it deletes
    the row outright.
    """

    def __init__(
        self,
        session: Session,
        edge_model: Type[EdgeT],
        subject_column: str,
        object_column: str,
        subject_model: Type[SubjectT],
        object_model: Type[ObjectT],
    ):
        """Initialize the repository for one edge kind.

        Args:
            session: SQLAlchemy session for database operations
            edge_model: The join table model, e.g. StoryLike
            subject_column: Attribute on the edge naming the subject, e.g. "user_id"
            object_column: Attribute on the edge naming the object, e.g. "story_id"
            subject_model: Model the subject column references
            object_model: Model the object column references
        """
        self.session = session
        self.edge_model = edge_model
        self.subject_model = subject_model
        self.object_model = object_model
        self._subject = getattr(edge_model, subject_column)
        self._object = getattr(edge_model, object_column)
        self._subject_column = subject_column
        self._object_column = object_column

    @property
    def name(self) -> str:
        return self.edge_model.__tablename__

    def get(self, subject_id: int, object_id: int) -> Optional[EdgeT]:
        return (
            self.session.query(self.edge_model)
            .filter(self._subject == subject_id, self._object == object_id)
            .first()
        )

    def add(self, subject_id: int, object_id: int) -> EdgeT:
        """Create the edge, or return it if it already exists.

        Raises:
            ValidationFailed: If the subject or object row does not exist
        """
        existing = self.get(subject_id, object_id)
        if existing:
            logger.debug("%s edge %s -> %s already present", self.name, subject_id, object_id)
            return existing

        if self.session.get(self.subject_model, subject_id) is None:
            logger.warning("Rejected %s edge: %s %s does not exist", self.name, self.subject_model.__name__, subject_id)
            raise ValidationFailed(f"{self.subject_model.__name__} {subject_id} does not exist")
        if self.session.get(self.object_model, object_id) is None:
            logger.warning("Rejected %s edge: %s %s does not exist", self.name, self.object_model.__name__, object_id)
            raise ValidationFailed(f"{self.object_model.__name__} {object_id} does not exist")

        edge = self.edge_model(**{self._subject_column: subject_id, self._object_column: object_id})
        try:
            with self.session.begin_nested():
                self.session.add(edge)
        except IntegrityError as e:
            # Lost a race against an identical insert; the winner's row is the edge
            winner = self.get(subject_id, object_id)
            if winner is None:
                raise ValidationFailed(f"Cannot create {self.name} edge: {e.orig}") from e
            self.session.commit()
            return winner

        self.session.commit()
        return edge

    def remove(self, subject_id: int, object_id: int) -> bool:
        """Delete the edge.

        Returns:
            True if a row was removed, False if there was no such edge
        """
        result = (
            self.session.query(self.edge_model)
            .filter(self._subject == subject_id, self._object == object_id)
            .delete()
        )
        self.session.commit()
        return result > 0

    def exists(self, subject_id: int, object_id: int) -> bool:
        return self.get(subject_id, object_id) is not None

    def list_objects(self, subject_id: int) -> List[ObjectT]:
        """Objects the subject points at, most recent edge first"""
        return (
            self.session.query(self.object_model)
            .join(self.edge_model, self._object == self.object_model.id)
            .filter(self._subject == subject_id)
            .order_by(self.edge_model.created_at.desc(), self.edge_model.id.desc())
            .all()
        )

    def list_subjects(self, object_id: int) -> List[SubjectT]:
        """Subjects pointing at the object, most recent edge first"""
        return (
            self.session.query(self.subject_model)
            .join(self.edge_model, self._subject == self.subject_model.id)
            .filter(self._object == object_id)
            .order_by(self.edge_model.created_at.desc(), self.edge_model.id.desc())
            .all()
        )

    def count(self, object_id: int) -> int:
        """Number of edges pointing at the object"""
        return (
            self.session.query(func.count(self.edge_model.id))
            .filter(self._object == object_id)
            .scalar()
        ) or 0
