"""
Dialogue parser - builds trees from JSON records and checks them.

Record format:

    {
        "id": "priest",
        "speaker": "Priest",
        "nodes": [
            {"id": "start", "text": "Bless you.",
             "choices": [{"text": "Got a ring?", "next": "ring"},
                         {"text": "Bye", "next": "end"}]},
            {"id": "ring", "text": "Take it.",
             "choices": [{"text": "Thanks!", "reward": "wedding_band"}]}
        ]
    }
"""

from __future__ import annotations

import logging
from typing import Any

from bestmen.components import (
    DialogueChoice,
    DialogueNode,
    DialogueTree,
)
from bestmen.errors import CatalogError

logger = logging.getLogger(__name__)


def parse_dialogue(record: dict[str, Any]) -> DialogueTree:
    """Convert a dialogue record into a tree, raising CatalogError if malformed."""
    try:
        nodes = [
            DialogueNode(
                id=node_data["id"],
                text=node_data.get("text", ""),
                choices=[
                    DialogueChoice(
                        text=choice_data.get("text", ""),
                        next=choice_data.get("next"),
                        reward=choice_data.get("reward"),
                        battle=bool(choice_data.get("battle", False)),
                    )
                    for choice_data in node_data.get("choices", [])
                ],
            )
            for node_data in record["nodes"]
        ]
        tree = DialogueTree(id=record["id"], speaker=record["speaker"], nodes=nodes)
    except (KeyError, TypeError, AttributeError) as e:
        raise CatalogError(f"malformed dialogue {record.get('id', '?')!r}: {e}") from e

    if not tree.nodes:
        raise CatalogError(f"dialogue {tree.id!r} has no nodes")

    problems = check_termination(tree)
    if problems:
        raise CatalogError(f"dialogue {tree.id!r}: " + "; ".join(problems))

    return tree


def is_exit(choice: DialogueChoice) -> bool:
    """A choice that leaves the conversation."""
    return choice.starts_battle or choice.reward is not None or choice.ends


def check_termination(tree: DialogueTree) -> list[str]:
    """
    Find cycles among node links.

    Every walk that follows "next" ids present in the tree must reach an
    exit (end, battle or reward) within len(tree) hops, which holds iff
    the link graph is acyclic. Links to unknown ids are only logged: the
    interpreter stays put on them at runtime.
    """
    ids = [node.id for node in tree.nodes]
    problems = [f"duplicate node id {node_id!r}" for node_id in sorted({i for i in ids if ids.count(i) > 1})]

    links: dict[str, list[str]] = {}
    for node in tree.nodes:
        targets = []
        for choice in node.choices:
            if is_exit(choice):
                continue
            if tree.find(choice.next) is None:
                logger.warning("Dialogue %s: node %s links to unknown node %s", tree.id, node.id, choice.next)
                continue
            targets.append(choice.next)
        links.setdefault(node.id, targets)

    visiting: set[str] = set()
    done: set[str] = set()

    def visit(node_id: str, path: list[str]) -> None:
        if node_id in done:
            return
        if node_id in visiting:
            cycle = path[path.index(node_id):] + [node_id]
            problems.append("cycle " + " -> ".join(cycle))
            return
        visiting.add(node_id)
        for target in links.get(node_id, []):
            visit(target, path + [target])
        visiting.discard(node_id)
        done.add(node_id)

    for node_id in links:
        visit(node_id, [node_id])

    return problems


__all__ = ["parse_dialogue", "check_termination", "is_exit"]
