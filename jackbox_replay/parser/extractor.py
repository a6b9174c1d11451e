"""Artifact id extraction from gallery session documents."""
from typing import Any, Optional


QUIPLASH3_GAME = "quiplash3Game"
QUIPLASH2_GAME = "Quiplash2Game"

SHAREABLE = "shareable"
CONTAINER = "container"

_END = object()


def _round_ids(matchups: Any) -> Optional[list[str]]:
    """Round indices "0".."N-1" for a matchups list, None if not a list."""
    if not isinstance(matchups, list):
        return None
    return [str(index) for index in range(len(matchups))]


def _quiplash3_matchups(document: Any) -> Any:
    """Read ``document[0].blob.matchups``, None on any shape mismatch."""
    if not isinstance(document, list) or not document:
        return None
    first = document[0]
    if not isinstance(first, dict):
        return None
    blob = first.get("blob")
    if not isinstance(blob, dict):
        return None
    return blob.get("matchups")


def _walk(nodes: list) -> list[str]:
    """
    Collect shareable ids from a list of nodes, in document order.
    
    Uses an explicit stack of iterators so arbitrarily deep containers
    cannot hit the recursion limit.
    """
    ids = []
    stack = [iter(nodes)]
    
    while stack:
        node = next(stack[-1], _END)
        if node is _END:
            stack.pop()
            continue
        
        if not isinstance(node, dict):
            continue
        
        node_type = node.get("type")
        if node_type == SHAREABLE:
            game_object_id = node.get("gameObjectId")
            if isinstance(game_object_id, str):
                ids.append(game_object_id)
        elif node_type == CONTAINER:
            children = node.get("children")
            if isinstance(children, list):
                stack.append(iter(children))
    
    return ids


def extract_game_object_ids(document: Any, game_name: str) -> list[str]:
    """
    Extract artifact ids from a session's ``gameData`` document.
    
    quiplash3Game sessions are identified by round index, one per entry
    of ``document[0].blob.matchups``. Every other game (and a
    quiplash3Game document without that shape) is walked as a tree of
    ``shareable`` and ``container`` nodes. Unknown or malformed nodes
    contribute nothing; this function never raises on bad input.
    
    Args:
        document: Parsed ``gameData`` value
        game_name: Game name from the replay URL
        
    Returns:
        Artifact ids in document order
    """
    if game_name == QUIPLASH3_GAME:
        rounds = _round_ids(_quiplash3_matchups(document))
        if rounds is not None:
            return rounds
    
    if not isinstance(document, list):
        return []
    
    return _walk(document)


def extract_from_response(body: Any, game_name: str) -> list[str]:
    """
    Extract artifact ids from a whole gallery response body.
    
    Quiplash2Game predates the gallery format: its session body carries a
    top-level ``matchups`` list instead of ``gameData``.
    
    Args:
        body: Parsed JSON response
        game_name: Game name from the replay URL
        
    Returns:
        Artifact ids, empty if the body has no usable data
    """
    if not isinstance(body, dict):
        return []
    
    if game_name == QUIPLASH2_GAME:
        rounds = _round_ids(body.get("matchups"))
        if rounds is not None:
            return rounds
    
    game_data = body.get("gameData")
    if not isinstance(game_data, list):
        return []
    
    return extract_game_object_ids(game_data, game_name)
