"""Comment Tree Reconstruction.

Turns a flat, possibly out-of-order list of comment records into a forest
of root comments with their replies attached.
"""

import logging
from collections import defaultdict
from dataclasses import replace
from typing import Dict, Iterable, Iterator, List, Sequence, Set

from .errors import DuplicateIdentityError
from .models import Comment

logger = logging.getLogger(__name__)

DUPLICATE_POLICIES = ('last_wins', 'error')

_EXHAUSTED = object()


class CommentTreeBuilder:
    """Build reply trees from flat comment records."""

    def __init__(self, duplicate_policy: str = 'last_wins'):
        """Initialize the builder.

        Args:
            duplicate_policy: 'last_wins' keeps the last record seen for a
                repeated id; 'error' raises DuplicateIdentityError instead
        """
        if duplicate_policy not in DUPLICATE_POLICIES:
            raise ValueError(
                f"duplicate_policy must be one of {DUPLICATE_POLICIES}, "
                f"got {duplicate_policy!r}"
            )
        self.duplicate_policy = duplicate_policy

    def index_comments(self, comments: Sequence[Comment]) -> Dict:
        """Pass 1: map each id to its record.

        Args:
            comments: Flat comment records

        Returns:
            Dictionary mapping comment ids to records
        """
        lookup = {}
        for comment in comments:
            if comment.id in lookup:
                if self.duplicate_policy == 'error':
                    raise DuplicateIdentityError(comment.id)
                logger.debug(f"Comment {comment.id!r} repeated, keeping the later record")
            lookup[comment.id] = comment
        return lookup

    def link_comments(self, comments: Sequence[Comment], lookup: Dict):
        """Pass 2: attach each record to its parent, in input order.

        A record whose parent is missing, or is itself, becomes a root.

        Args:
            comments: Flat comment records
            lookup: Output of index_comments

        Returns:
            Tuple of (root ids, dictionary mapping parent id to child ids)
        """
        root_ids = []
        children = defaultdict(list)
        linked = set()

        for comment in comments:
            # Superseded duplicates are not placed
            if lookup[comment.id] is not comment or comment.id in linked:
                continue
            linked.add(comment.id)

            parent_id = comment.parent_id
            if parent_id is not None and parent_id != comment.id and parent_id in lookup:
                children[parent_id].append(comment.id)
            else:
                root_ids.append(comment.id)

        return root_ids, children

    @staticmethod
    def _materialize(root_id, lookup: Dict, children: Dict, placed: Set) -> Comment:
        """Create immutable nodes for one subtree, bottom-up.

        Ids already in ``placed`` are skipped, so each record is emitted once
        even when the parent links contain a cycle.
        """
        placed.add(root_id)
        built = {root_id: []}
        stack = [(root_id, iter(children.get(root_id, ())))]

        while stack:
            node_id, pending = stack[-1]
            child_id = next(pending, _EXHAUSTED)

            if child_id is _EXHAUSTED:
                stack.pop()
                node = replace(lookup[node_id], children=tuple(built.pop(node_id)))
                if not stack:
                    return node
                built[stack[-1][0]].append(node)
            elif child_id not in placed:
                placed.add(child_id)
                built[child_id] = []
                stack.append((child_id, iter(children.get(child_id, ()))))

    def build(self, comments: Iterable[Comment]) -> List[Comment]:
        """Build the comment forest.

        Args:
            comments: Flat comment records, each optionally naming a parent

        Returns:
            Root comments in input order, replies attached in input order
        """
        comments = list(comments)
        lookup = self.index_comments(comments)
        root_ids, children = self.link_comments(comments, lookup)

        placed = set()
        roots = [self._materialize(root_id, lookup, children, placed) for root_id in root_ids]

        # Records whose ancestry loops back on itself never hang off a root
        for comment in comments:
            if comment.id not in placed and lookup[comment.id] is comment:
                logger.warning(f"Comment {comment.id!r} is part of a parent cycle, promoting to root")
                roots.append(self._materialize(comment.id, lookup, children, placed))

        logger.debug(f"Built {len(roots)} threads from {len(comments)} comments")
        return roots


def build_comment_tree(
    comments: Iterable[Comment],
    duplicate_policy: str = 'last_wins'
) -> List[Comment]:
    """Build a comment forest with a one-off builder."""
    return CommentTreeBuilder(duplicate_policy).build(comments)


def iter_comments(comments: Iterable[Comment]) -> Iterator[Comment]:
    """Walk comments and their replies in pre-order, yielding each id once.

    Works on flat lists and on built forests alike.
    """
    seen = set()
    stack = list(reversed(list(comments)))

    while stack:
        comment = stack.pop()
        if comment.id in seen:
            continue
        seen.add(comment.id)
        yield comment
        stack.extend(reversed(comment.children))


def flatten_comment_tree(roots: Iterable[Comment]) -> List[Comment]:
    """Pre-order list of every comment in a forest."""
    return list(iter_comments(roots))


def flatten_records(payload: Iterable[Dict]) -> List[Dict]:
    """Flatten provider records that arrive already nested.

    Each nested record's ``parent_id`` is filled from its enclosing record
    when the provider left it out. Input dictionaries are not modified.

    Args:
        payload: Records, each optionally carrying a ``children`` list

    Returns:
        Flat list of records in pre-order, without ``children``
    """
    flat = []
    stack = [(record, None) for record in reversed(list(payload))]

    while stack:
        record, parent_id = stack.pop()
        nested = record.get('children') or []

        flat_record = {key: value for key, value in record.items() if key != 'children'}
        if flat_record.get('parent_id') is None and parent_id is not None:
            flat_record['parent_id'] = parent_id
        flat.append(flat_record)

        own_id = record.get('id') if record.get('id') is not None else record.get('id_code')
        stack.extend((child, own_id) for child in reversed(nested))

    return flat
