"""
Generic CRUD access to one table.

An EntityStore is bound to an ORM model and the pydantic schema handed back
to callers. Every operation works against the caller's Session so that it
takes part in the caller's transaction; nothing here commits.

Absence is reported as None, never as an exception. Database failures
(including constraint violations) propagate unchanged.
"""

import logging
from typing import Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from app.db.session import Base

logger = logging.getLogger("app.store")

ModelType = TypeVar("ModelType", bound=Base)
EntityType = TypeVar("EntityType", bound=BaseModel)


class EntityStore(Generic[ModelType, EntityType]):
    def __init__(self, model: Type[ModelType], entity: Type[EntityType]):
        self.model = model
        self.entity = entity
        self.name = model.__tablename__

    def _to_entity(self, obj: ModelType) -> EntityType:
        return self.entity.model_validate(obj)

    def _load(self, db: Session, id: str) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def get(self, db: Session, id: str) -> Optional[EntityType]:
        """Get row by ID"""
        logger.debug(f"Getting {self.name} with ID: {id}")
        obj = self._load(db, id)
        if obj is None:
            return None
        return self._to_entity(obj)

    def exists(self, db: Session, id: str) -> bool:
        return db.query(self.model.id).filter(self.model.id == id).first() is not None

    def get_all(self, db: Session) -> List[EntityType]:
        """Get all rows, newest first"""
        logger.debug(f"Getting all {self.name}")
        rows = db.query(self.model).order_by(self.model.created_at.desc()).all()
        return [self._to_entity(obj) for obj in rows]

    def create(self, db: Session, obj_in: BaseModel) -> EntityType:
        """Insert a row; id and created_at are generated by the store"""
        logger.debug(f"Creating {self.name}")
        obj = self.model(**obj_in.model_dump(mode="json"))
        db.add(obj)
        db.flush()
        db.refresh(obj)
        return self._to_entity(obj)

    def update(self, db: Session, id: str, obj_in: BaseModel) -> Optional[EntityType]:
        """Replace every mutable field and stamp updated_at"""
        logger.debug(f"Updating {self.name} with ID: {id}")
        obj = self._load(db, id)
        if obj is None:
            return None

        for field, value in obj_in.model_dump(mode="json").items():
            setattr(obj, field, value)
        # Always stamped, so an UPDATE is emitted even when nothing else changed
        obj.updated_at = func.now()

        db.flush()
        db.refresh(obj)
        return self._to_entity(obj)

    def delete(self, db: Session, id: str) -> Optional[EntityType]:
        """Delete a row, returning its last known values"""
        logger.debug(f"Deleting {self.name} with ID: {id}")
        obj = self._load(db, id)
        if obj is None:
            return None

        entity = self._to_entity(obj)
        db.delete(obj)
        db.flush()
        return entity
