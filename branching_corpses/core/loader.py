from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Generic, Sequence, TypeVar

from pydantic import TypeAdapter, ValidationError

from .models import ENDING_KINDS, DialogueNode, PlayerLogNode, StoryManifest

T = TypeVar("T", DialogueNode, PlayerLogNode)


class ContentValidationError(ValueError):
    def __init__(self, message: str, details: list[str] | None = None) -> None:
        self.details = details or []
        suffix = "\n".join(self.details)
        super().__init__(f"{message}\n{suffix}" if suffix else message)


@dataclass(slots=True)
class NodeArena(Generic[T]):
    """Nodes of one channel addressed by stable integer handles.

    ``links[handle]`` is the handle of the successor node, or None when the node
    terminates its chain.
    """

    nodes: list[T]
    links: list[int | None]
    handle_by_id: dict[str, int] = field(default_factory=dict)

    def node(self, handle: int) -> T:
        return self.nodes[handle]

    def next_of(self, handle: int) -> int | None:
        return self.links[handle]

    def handle(self, node_id: str) -> int:
        try:
            return self.handle_by_id[node_id]
        except KeyError:
            raise KeyError(f"Unknown node id '{node_id}'.") from None

    def chain(self, start: int) -> list[T]:
        result: list[T] = []
        current: int | None = start
        while current is not None:
            result.append(self.nodes[current])
            current = self.links[current]
        return result


@dataclass(slots=True)
class NarrativeStore:
    manifest: StoryManifest
    dialogues: NodeArena[DialogueNode]
    player_logs: NodeArena[PlayerLogNode]

    @property
    def intro_entry(self) -> int:
        return self.dialogues.handle(self.manifest.intro)

    @property
    def main_entry(self) -> int:
        return self.dialogues.handle(self.manifest.main)

    @property
    def player_log_entry(self) -> int:
        return self.player_logs.handle(self.manifest.player_log)

    @property
    def losing_player_log_entry(self) -> int | None:
        if self.manifest.losing_player_log is None:
            return None
        return self.player_logs.handle(self.manifest.losing_player_log)

    def ending_entry(self, ending: str) -> int:
        return self.dialogues.handle(self.manifest.endings.entry_for(ending))


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ContentValidationError(f"Missing content file: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ContentValidationError(f"Invalid JSON in {path.name}: {exc.msg} at line {exc.lineno}") from exc


def _schema_errors(name: str, exc: ValidationError) -> list[str]:
    errors = []
    for issue in exc.errors():
        issue_path = ".".join(str(part) for part in issue.get("loc", [])) or "(root)"
        errors.append(f"{name}:{issue_path}: {issue.get('msg', 'validation error')}")
    return errors


def _validate_typed(name: str, data: Any, item_type: Any) -> Any:
    adapter = TypeAdapter(item_type)
    try:
        return adapter.validate_python(data)
    except ValidationError as exc:
        raise ContentValidationError(f"Schema validation failed for {name}.", _schema_errors(name, exc)) from exc


def _assert_unique_ids(kind: str, values: Sequence[Any]) -> None:
    seen: set[str] = set()
    for entry in values:
        if entry.id in seen:
            raise ContentValidationError(f"Duplicate {kind} id '{entry.id}'.")
        seen.add(entry.id)


def _assert_ref(exists: bool, message: str) -> None:
    if not exists:
        raise ContentValidationError(message)


def _assert_acyclic(kind: str, links: list[int | None], node_ids: list[str]) -> None:
    # Each chain is walked once; ``done`` holds nodes already proven to reach a terminal.
    done: set[int] = set()
    for start in range(len(links)):
        path: list[int] = []
        on_path: set[int] = set()
        current: int | None = start
        while current is not None and current not in done:
            if current in on_path:
                cycle = path[path.index(current):] + [current]
                route = " -> ".join(node_ids[idx] for idx in cycle)
                raise ContentValidationError(f"{kind} chain contains a cycle: {route}.")
            on_path.add(current)
            path.append(current)
            current = links[current]
        done.update(path)


def build_arena(kind: str, nodes: list[T]) -> NodeArena[T]:
    _assert_unique_ids(kind, nodes)
    handle_by_id = {node.id: idx for idx, node in enumerate(nodes)}
    links: list[int | None] = []
    for node in nodes:
        if node.next is None:
            links.append(None)
            continue
        _assert_ref(
            node.next in handle_by_id,
            f"{kind} '{node.id}' next references missing {kind} '{node.next}'.",
        )
        links.append(handle_by_id[node.next])
    _assert_acyclic(kind, links, [node.id for node in nodes])
    return NodeArena(nodes=nodes, links=links, handle_by_id=handle_by_id)


def _validate_manifest(
    manifest: StoryManifest,
    dialogues: NodeArena[DialogueNode],
    player_logs: NodeArena[PlayerLogNode],
) -> None:
    dialogue_refs = {
        "intro": manifest.intro,
        "main": manifest.main,
    }
    for ending in ENDING_KINDS:
        dialogue_refs[f"endings.{ending}"] = manifest.endings.entry_for(ending)
    for field_name, node_id in dialogue_refs.items():
        _assert_ref(
            node_id in dialogues.handle_by_id,
            f"story.json {field_name} references missing dialogue '{node_id}'.",
        )

    log_refs = {"playerLog": manifest.player_log}
    if manifest.losing_player_log is not None:
        log_refs["losingPlayerLog"] = manifest.losing_player_log
    for field_name, node_id in log_refs.items():
        _assert_ref(
            node_id in player_logs.handle_by_id,
            f"story.json {field_name} references missing player log '{node_id}'.",
        )


def build_store(
    manifest: StoryManifest,
    dialogues: list[DialogueNode],
    player_logs: list[PlayerLogNode],
) -> NarrativeStore:
    dialogue_arena = build_arena("dialogue", dialogues)
    log_arena = build_arena("player log", player_logs)
    _validate_manifest(manifest, dialogue_arena, log_arena)
    return NarrativeStore(manifest=manifest, dialogues=dialogue_arena, player_logs=log_arena)


def load_story(content_dir: Path | str) -> NarrativeStore:
    base_path = Path(content_dir)
    manifest = _validate_typed("story.json", _load_json(base_path / "story.json"), StoryManifest)
    dialogues = _validate_typed("dialogues.json", _load_json(base_path / "dialogues.json"), list[DialogueNode])
    player_logs = _validate_typed("player_logs.json", _load_json(base_path / "player_logs.json"), list[PlayerLogNode])
    return build_store(manifest, dialogues, player_logs)


def default_content_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "content"
