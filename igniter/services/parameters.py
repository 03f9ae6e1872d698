"""Key/value store for system-wide parameters."""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from igniter.models.database_models import Parameter


logger = logging.getLogger(__name__)


class ParameterStore:
    """Read and write ``Parameter`` rows through an open session.

    Values are JSON encoded so numbers and booleans survive a round trip.
    The caller owns the transaction.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, key: str, default: Any = None) -> Any:
        row = self.db.get(Parameter, key)
        if row is None or row.value is None:
            return default
        return json.loads(row.value)

    def all(self) -> dict[str, Any]:
        rows = self.db.scalars(select(Parameter).order_by(Parameter.item))
        return {row.item: json.loads(row.value) if row.value is not None else None for row in rows}

    def set(self, key: str | Mapping[str, Any], value: Any = None) -> None:
        """Upsert one parameter, or every entry of a mapping."""
        values = dict(key) if isinstance(key, Mapping) else {key: value}

        for item, item_value in values.items():
            encoded = json.dumps(item_value)
            row = self.db.get(Parameter, item)
            if row is None:
                self.db.add(Parameter(item=item, value=encoded))
            else:
                row.value = encoded
            logger.debug("Parameter %s set", item)
        self.db.flush()

    def forget(self, key: str) -> bool:
        """Delete a parameter; return whether it existed."""
        result = self.db.execute(delete(Parameter).where(Parameter.item == key))
        return bool(result.rowcount)
