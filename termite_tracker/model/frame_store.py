from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
import json
import logging

from .entities import FrameEntry, FrameStatus, MarkerState, MarkerTemplate

DOCUMENT_VERSION = 1


class FrameStoreError(Exception):
    """Base class for annotation document failures."""


class DocumentParseError(FrameStoreError):
    """The annotation document could not be read or has an invalid layout."""


class FrameNotFoundError(FrameStoreError, KeyError):
    """No frame has been saved for the requested timestamp."""

    def __init__(self, timestamp: int) -> None:
        super().__init__(timestamp)
        self.timestamp = timestamp

    def __str__(self) -> str:
        return f"no frame saved for timestamp {self.timestamp}"


class MissingTemplateError(FrameStoreError):
    """A frame entry references a marker id with no template."""


@dataclass
class Document:
    templates: Dict[int, MarkerTemplate] = field(default_factory=dict)
    frames: Dict[int, List[FrameEntry]] = field(default_factory=dict)


class FrameStore:
    """Timestamp keyed marker states backed by a single JSON file.

    Every save rewrites the whole file. Frame positions live per timestamp,
    caste and color live in a template table shared by all timestamps.
    """

    def __init__(self, path: Optional[Path] = None, document: Optional[Document] = None) -> None:
        self._log = logging.getLogger(__name__)
        self.path = path
        self.document = document or Document()

    @classmethod
    def open(cls, path: Path) -> "FrameStore":
        path = Path(path)
        if not path.exists():
            logging.getLogger(__name__).info("FrameStore: %s not found, starting empty document", path)
            return cls(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            raise DocumentParseError(f"Unable to read {path}: {exc}") from exc
        store = cls(path, parse_document(data))
        store._log.info(
            "FrameStore: loaded %s (%s templates, %s frames)",
            path,
            len(store.document.templates),
            len(store.document.frames),
        )
        return store

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def has_frame(self, timestamp: int) -> bool:
        return int(timestamp) in self.document.frames

    def frame_status(self, timestamp: int) -> FrameStatus:
        return FrameStatus.ANNOTATED if self.has_frame(timestamp) else FrameStatus.NOT_ANNOTATED

    def annotated_timestamps(self) -> List[int]:
        return sorted(self.document.frames)

    def load(self, timestamp: int) -> List[MarkerState]:
        timestamp = int(timestamp)
        entries = self.document.frames.get(timestamp)
        if entries is None:
            raise FrameNotFoundError(timestamp)
        states: List[MarkerState] = []
        for entry in entries:
            template = self.document.templates.get(entry.marker_id)
            if template is None:
                raise MissingTemplateError(
                    f"timestamp {timestamp} references marker {entry.marker_id} without a template"
                )
            states.append(
                MarkerState(
                    marker_id=entry.marker_id,
                    caste=template.caste,
                    position=entry.position,
                    orientation=entry.orientation,
                    color=template.color,
                )
            )
        return states

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def save(self, timestamp: int, states: Iterable[MarkerState]) -> None:
        timestamp = int(timestamp)
        entries: List[FrameEntry] = []
        for state in states:
            self.document.templates[state.marker_id] = MarkerTemplate(caste=state.caste, color=state.color)
            entries.append(
                FrameEntry(
                    marker_id=state.marker_id,
                    position=(int(state.position[0]), int(state.position[1])),
                    orientation=float(state.orientation),
                )
            )
        self.document.frames[timestamp] = entries
        self._log.debug("FrameStore: saved t=%s markers=%s", timestamp, len(entries))
        self.flush()

    def flush(self) -> None:
        if self.path is None:
            return
        self.path.write_text(json.dumps(serialize_document(self.document), indent=2), encoding="utf-8")


def serialize_document(document: Document) -> Dict[str, Any]:
    termites = {
        str(marker_id): {
            "caste": int(template.caste),
            "color": {"r": template.color[0], "g": template.color[1], "b": template.color[2]},
        }
        for marker_id, template in sorted(document.templates.items())
    }
    locations = {
        str(timestamp): [
            {
                "ant_id": entry.marker_id,
                "pos_x": entry.position[0],
                "pos_y": entry.position[1],
                "body_rot": entry.orientation,
            }
            for entry in entries
        ]
        for timestamp, entries in sorted(document.frames.items())
    }
    return {"version": DOCUMENT_VERSION, "termites": termites, "locations": locations}


def parse_document(data: Any) -> Document:
    if not isinstance(data, dict):
        raise DocumentParseError("Annotation document must be a JSON object.")
    termites = data.get("termites")
    locations = data.get("locations")
    if termites is None:
        termites = {}
    if locations is None:
        locations = {}
    if not isinstance(termites, dict) or not isinstance(locations, dict):
        raise DocumentParseError("'termites' and 'locations' must be JSON objects.")

    document = Document()
    try:
        for key, payload in termites.items():
            color = payload["color"]
            document.templates[int(key)] = MarkerTemplate(
                caste=int(payload["caste"]),
                color=(int(color["r"]), int(color["g"]), int(color["b"])),
            )
        for key, entries in locations.items():
            timestamp = int(key)
            if timestamp < 0:
                raise ValueError(f"negative timestamp {timestamp}")
            document.frames[timestamp] = [
                FrameEntry(
                    marker_id=int(entry["ant_id"]),
                    position=(int(entry["pos_x"]), int(entry["pos_y"])),
                    orientation=float(entry["body_rot"]),
                )
                for entry in entries
            ]
    except (KeyError, TypeError, ValueError) as exc:
        raise DocumentParseError(f"Invalid annotation document: {exc}") from exc
    return document
