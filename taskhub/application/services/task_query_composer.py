"""Task query composition.

Builds the FilterExpression for a task listing from the actor and the
request's query parameters:

    scope predicate   (MatchAll for admins, created_by|assigned_to otherwise)
    AND status        (validated first)
    AND project_label
    AND project_id
    AND (heading contains term OR description contains term)

The search OR group is always its own nested clause, so a user's search
can never widen the result past their scope.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from taskhub.domain.models.actor import ActorIdentity
from taskhub.domain.services.task_lifecycle import parse_status
from taskhub.domain.value_objects.auth_scope import scope_for
from taskhub.domain.value_objects.filter_expression import (
    AnyOf,
    FieldContains,
    FieldEquals,
    FilterExpression,
    SortSpec,
    conjoin,
)

# Newest tasks first
TASK_SORT = SortSpec("created_date", descending=True)

SEARCH_FIELDS: tuple[str, ...] = ("heading", "description")


@dataclass(frozen=True)
class TaskQueryParams:
    """Optional filters accepted by the task listing.

    Attributes:
        status: Raw status string; validated when the filter is built.
        project_label: Legacy free-text project name.
        project_id: Project id.
        search: Literal text searched in heading and description.
    """

    status: str | None = None
    project_label: str | None = None
    project_id: UUID | None = None
    search: str | None = None


def search_clause(term: str) -> FilterExpression:
    """Case-insensitive literal substring match over SEARCH_FIELDS."""
    return AnyOf(*(FieldContains(name, term) for name in SEARCH_FIELDS))


def build_task_filter(
    actor: ActorIdentity, params: TaskQueryParams | None = None
) -> FilterExpression:
    """Compose the listing filter for ``actor``.

    Args:
        actor: The requesting identity.
        params: Optional filters. Empty strings count as absent.

    Returns:
        The composed expression. With no filters this is the scope
        predicate alone (MatchAll for admins).

    Raises:
        InvalidStatusError: If params.status is not a known status.
    """
    params = params or TaskQueryParams()
    clauses: list[FilterExpression] = [scope_for(actor).to_filter()]

    if params.status:
        clauses.append(FieldEquals("status", parse_status(params.status).value))
    if params.project_label:
        clauses.append(FieldEquals("project_label", params.project_label))
    if params.project_id is not None:
        clauses.append(FieldEquals("project_id", params.project_id))
    if params.search:
        clauses.append(search_clause(params.search))

    return conjoin(clauses)
