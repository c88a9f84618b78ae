"""Schema-guided deep comparison for json-schema-diff."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator

from .models import ChangeRecord, ChangeType, FieldInfo, JsonKind
from .schema import SchemaIndex
from .utils import build_path, get_kind


logger = logging.getLogger(__name__)


class TreeComparer:
    """
    Walks two parsed JSON documents in parallel and reports differences.

    Every visited path is looked up in the schema: read-only fields are
    skipped together with their subtrees, and each reported change
    carries the field's metadata and a noisy flag. Ignored paths are
    matched exactly and also cut off their subtrees.

    Arrays are compared position by position. Inserting an element in
    the middle of an array reports every shifted element as changed plus
    one addition at the end.

    A JSON null is treated the same as a missing value.
    """

    def __init__(self, schema_index: SchemaIndex, ignore_fields: Iterable[str] = ()):
        self.schema_index = schema_index
        self.ignore_fields = frozenset(str(f) for f in ignore_fields)

    def compare(self, old: Any, new: Any) -> list[ChangeRecord]:
        """
        Compare two documents.

        Args:
            old: The baseline document
            new: The document to compare against the baseline

        Returns:
            Changes in document order
        """
        changes = list(self._visit(old, new, ""))
        logger.debug("Comparison found %d change(s)", len(changes))
        return changes

    def _visit(self, old: Any, new: Any, path: str) -> Iterator[ChangeRecord]:
        if path in self.ignore_fields:
            logger.debug("Skipping ignored path %r", path)
            return

        field_info = self.schema_index.resolve(path)
        if field_info.read_only:
            logger.debug("Skipping read-only path %r", path)
            return

        if old is None and new is None:
            return

        if old is None:
            yield self._change(path, old, new, ChangeType.ADDITION, field_info)
            return

        if new is None:
            yield self._change(path, old, new, ChangeType.REMOVAL, field_info)
            return

        old_kind = get_kind(old)
        if old_kind != get_kind(new):
            yield self._change(path, old, new, ChangeType.TYPE_CHANGE, field_info)
        elif old_kind == JsonKind.OBJECT:
            yield from self._visit_object(old, new, path)
        elif old_kind == JsonKind.ARRAY:
            yield from self._visit_array(old, new, path)
        elif old != new:
            yield self._change(path, old, new, ChangeType.MODIFICATION, field_info)

    def _visit_object(self, old: dict, new: dict, path: str) -> Iterator[ChangeRecord]:
        # dict preserves insertion order: old keys first, then new-only keys
        keys = dict.fromkeys(old)
        keys.update(dict.fromkeys(new))

        for key in keys:
            yield from self._visit(old.get(key), new.get(key), build_path(path, key))

    def _visit_array(self, old: list, new: list, path: str) -> Iterator[ChangeRecord]:
        for index in range(max(len(old), len(new))):
            old_item = old[index] if index < len(old) else None
            new_item = new[index] if index < len(new) else None
            yield from self._visit(old_item, new_item, build_path(path, index))

    def _change(
        self,
        path: str,
        old: Any,
        new: Any,
        change_type: ChangeType,
        field_info: FieldInfo
    ) -> ChangeRecord:
        is_noisy = (
            self.schema_index.is_noisy(path, old)
            or self.schema_index.is_noisy(path, new)
        )
        return ChangeRecord(
            path=path,
            old_value=old,
            new_value=new,
            change_type=change_type,
            field_info=field_info,
            is_noisy=is_noisy,
        )
