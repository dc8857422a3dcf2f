import logging
from enum import Enum

from pydantic import BaseModel
from sqlalchemy import inspect
from sqlalchemy.orm import Session

_LOG = logging.getLogger("app.services.subtypes")


class SubtypeRegistry:
    """Maps each value of a discriminant enum to the satellite table holding
    the variant specific columns of a base row.

    Every method works inside the caller's session and never commits: the
    base row and its satellite are always written in one transaction.
    """

    def __init__(self, discriminant: type[Enum], tag_field: str, satellites: dict):
        missing = set(discriminant) - set(satellites)
        unknown = set(satellites) - set(discriminant)
        if missing or unknown:
            raise RuntimeError(
                f"{discriminant.__name__} satellites out of sync: "
                f"missing={sorted(m.value for m in missing)} unknown={sorted(map(str, unknown))}"
            )
        self.discriminant = discriminant
        self.tag_field = tag_field
        self._satellites = {variant.value: model for variant, model in satellites.items()}

    def model_for(self, variant):
        key = variant.value if isinstance(variant, Enum) else str(variant)
        try:
            return self._satellites[key]
        except KeyError:
            raise ValueError(f"unknown {self.discriminant.__name__} {key!r}")

    def variant_of(self, details: BaseModel) -> str:
        return str(getattr(details, self.tag_field))

    def columns_of(self, details: BaseModel) -> dict:
        return details.model_dump(mode="json", exclude={self.tag_field})

    def load(self, db: Session, variant, entity_id: int):
        return db.get(self.model_for(variant), entity_id)

    def values(self, db: Session, variant, entity_id: int) -> dict | None:
        """Variant specific columns of one satellite row, without its key."""
        row = self.load(db, variant, entity_id)
        if row is None:
            return None
        return {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs if attr.key != "id"}

    def insert(self, db: Session, entity_id: int, details: BaseModel):
        model = self.model_for(self.variant_of(details))
        row = model(id=entity_id, **self.columns_of(details))
        db.add(row)
        db.flush()
        return row

    def delete(self, db: Session, variant, entity_id: int) -> int:
        model = self.model_for(variant)
        removed = db.query(model).filter(model.id == entity_id).delete(synchronize_session="fetch")
        db.flush()
        return removed

    def sync(self, db: Session, entity_id: int, old_variant, details: BaseModel):
        """Bring the satellite of ``entity_id`` in line with ``details``.

        Same variant: update the existing row in place. Different variant:
        drop the old satellite, then insert the new one.
        """
        new_variant = self.variant_of(details)
        old_key = old_variant.value if isinstance(old_variant, Enum) else str(old_variant)
        if old_key != new_variant:
            _LOG.info("%s %s changes %s -> %s", self.discriminant.__name__, entity_id, old_key, new_variant)
            self.delete(db, old_key, entity_id)
            return self.insert(db, entity_id, details)
        row = self.load(db, new_variant, entity_id)
        if row is None:
            return self.insert(db, entity_id, details)
        for key, value in self.columns_of(details).items():
            setattr(row, key, value)
        db.flush()
        return row

    def count_satellites(self, db: Session, entity_id: int) -> int:
        return sum(
            db.query(model).filter(model.id == entity_id).count()
            for model in self._satellites.values()
        )
